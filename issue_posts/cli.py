import argparse
import os

from issue_posts import __version__
from issue_posts.logging import get_logger
from issue_posts.orchestrator import run

log = get_logger("issue_posts.cli")


def main(argv: list[str] | None = None) -> int:  # e.g. ['--version'], ['run', '--config', 'blog.yaml'], ['--repo', 'android-faq']
    parser = argparse.ArgumentParser(description="Export GitHub issues as Jekyll posts")
    parser.add_argument("command", nargs="?", default="run", help="Command to execute (only 'run' is supported)")
    parser.add_argument("--config", dest="config_path", help="Path to a config YAML file")
    parser.add_argument("--env", dest="env_name", help="Named environment to resolve config.<env>.yaml")
    parser.add_argument("--owner", help="Repository owner, overrides the config file")
    parser.add_argument("--repo", help="Repository name, overrides the config file")
    parser.add_argument("--posts-dir", dest="posts_dir", help="Existing directory the posts are written to")
    parser.add_argument("--workers", type=int, help="Threads used to fetch comments")
    parser.add_argument("--version", action="store_true", help="Print version and exit")

    args = parser.parse_args(argv)

    if args.version:
        print(f"issue-posts {__version__}")
        return 0

    if args.config_path:
        os.environ["ISSUE_POSTS_CONFIG_PATH"] = args.config_path
    if args.env_name:
        os.environ["ISSUE_POSTS_ENV"] = args.env_name

    if args.command != "run":
        parser.error("Unsupported command; only 'run' is available")

    log.info("starting export")
    summary = run(
        {
            "owner": args.owner,
            "repo": args.repo,
            "posts_dir": args.posts_dir,
            "workers": args.workers,
        }
    )
    log.info("export finished status=%s", summary.status)
    return 0 if summary.ok else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
