import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import ValidationError

from issue_posts.enrichers.comments import enrich_issues
from issue_posts.errors import ConfigError, ExportError
from issue_posts.extractors.http_github import GitHubIssuesClient
from issue_posts.loaders.jekyll_posts import write_posts
from issue_posts.logging import get_logger
from issue_posts.models import ExportConfig

log = get_logger()


@dataclass(frozen=True)
class ExportSummary:
    status: str
    issues: int = 0
    with_comments: int = 0
    written: int = 0
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status == "completed"


def _resolve_config_path() -> Path:
    env_path = os.getenv("ISSUE_POSTS_CONFIG_PATH")
    if env_path:
        cfg_path = Path(env_path)
        if not cfg_path.exists():
            raise FileNotFoundError(f"ISSUE_POSTS_CONFIG_PATH={env_path} does not exist")
        return cfg_path

    base_path = Path(__file__).resolve().with_name("config.yaml")
    env_name = os.getenv("ISSUE_POSTS_ENV")
    if env_name:
        candidate = base_path.with_name(f"config.{env_name}.yaml")
        if candidate.exists():
            return candidate
    return base_path


def load_config(overrides: dict | None = None) -> ExportConfig:
    cfg_path = _resolve_config_path()
    with open(cfg_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{cfg_path} must hold a mapping of options, got {type(raw).__name__}")
    log.info(f"loaded configuration from {cfg_path}")
    raw.update({k: v for k, v in (overrides or {}).items() if v is not None})
    if not raw.get("token"):
        raw["token"] = os.getenv("GITHUB_TOKEN")
    return ExportConfig.model_validate(raw)


def build_client(cfg: ExportConfig, session=None) -> GitHubIssuesClient:
    return GitHubIssuesClient(
        cfg.owner,
        cfg.repo,
        cfg.token,
        per_page=cfg.page_size,
        state=cfg.state,
        timeout=cfg.request_timeout,
        max_attempts=cfg.max_attempts,
        backoff_seconds=cfg.backoff_seconds,
        base_url=cfg.base_url,
        session=session,
    )


def export(cfg: ExportConfig, session=None) -> ExportSummary:
    """Fetch, enrich and write every issue of ``cfg.repo``.

    Raises on the first failure; posts written before it stay on disk.
    """
    with build_client(cfg, session=session) as client:
        issues = client.fetch_all_issues()
        if cfg.skip_pull_requests:
            issues = tuple(i for i in issues if not i.pull_request)
        enriched = enrich_issues(client, issues, workers=cfg.workers)
    written = write_posts(enriched, cfg.posts_dir)
    return ExportSummary(
        status="completed",
        issues=len(enriched),
        with_comments=sum(1 for i in enriched if i.comment_list),
        written=written,
    )


def run(overrides: dict | None = None, session=None) -> ExportSummary:
    try:
        cfg = load_config(overrides)
    except (ValidationError, ConfigError, OSError, yaml.YAMLError) as exc:
        log.error("invalid configuration: %s", exc)
        return ExportSummary(status="failed", error=exc)

    log.info(f"=== Export: {cfg.owner}/{cfg.repo} -> {cfg.posts_dir} ===")
    try:
        summary = export(cfg, session=session)
    except (ExportError, OSError) as exc:
        log.error("export of %s/%s failed: %s", cfg.owner, cfg.repo, exc, exc_info=True)
        summary = ExportSummary(status="failed", error=exc)

    log.info(
        f"SUMMARY[{summary.status.upper()}]: issues={summary.issues} "
        f"with_comments={summary.with_comments} written={summary.written}"
    )
    return summary


if __name__ == "__main__":
    run()
