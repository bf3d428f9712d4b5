from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Iterable

from issue_posts.logging import get_logger
from issue_posts.models import Issue

log = get_logger(__name__)


def enrich_issue(client, issue: Issue) -> Issue:
    if issue.comments <= 0:
        return issue
    comments = client.fetch_comments(issue.number, expected=issue.comments)
    if len(comments) != issue.comments:
        log.warning(
            "issue #%s reports %s comments but %s were returned",
            issue.number,
            issue.comments,
            len(comments),
        )
    return issue.with_comments(comments)


def enrich_issues(client, issues: Iterable[Issue], workers: int = 1) -> tuple[Issue, ...]:
    """Attach comments to every issue that has any, keeping input order."""
    enrich = partial(enrich_issue, client)
    if workers <= 1:
        enriched = tuple(map(enrich, issues))
    else:
        # map() yields results in submission order and re-raises the first failure
        with ThreadPoolExecutor(max_workers=workers) as pool:
            enriched = tuple(pool.map(enrich, issues))
    log.info(
        "enriched %s of %s issues with comments",
        sum(1 for i in enriched if i.comment_list),
        len(enriched),
    )
    return enriched
