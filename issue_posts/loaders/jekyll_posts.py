from datetime import timezone
from pathlib import Path
from typing import Iterable

from issue_posts.errors import OutputDirectoryError
from issue_posts.logging import get_logger
from issue_posts.models import Issue

log = get_logger(__name__)


def _front_matter(issue: Issue) -> list[str]:
    lines = ["---", "layout: post", f"title: {issue.title}"]
    if issue.labels:
        lines.append("tags: [" + ", ".join(label.name for label in issue.labels) + "]")
    lines.append("---")
    return lines


def render_post(issue: Issue) -> str:
    lines = _front_matter(issue)
    lines += ["", "", issue.body or ""]
    for comment in issue.comment_list:
        lines.append(f"<!-- comment #{comment.id} -->")
        lines.append(comment.body or "")
    return "\n".join(lines) + "\n"


def post_path(issue: Issue, posts_dir: str | Path = "_posts") -> Path:
    day = issue.created_at.astimezone(timezone.utc).strftime("%Y-%m-%d")
    return Path(posts_dir) / f"{day}-{issue.number}.html"


def write_posts(issues: Iterable[Issue], posts_dir: str | Path = "_posts") -> int:
    root = Path(posts_dir)
    if not root.is_dir():
        raise OutputDirectoryError(f"posts directory {root} does not exist")
    n = 0
    for issue in issues:
        path = post_path(issue, root)
        # LF endings on every platform
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(render_post(issue))
        n += 1
        log.debug("wrote %s", path)
    log.info(f"wrote {n} posts to {root}")
    return n
