import itertools
import time

import requests

from issue_posts.errors import ApiError, MalformedResponse
from issue_posts.logging import get_logger
from issue_posts.models import Comment, Issue
from issue_posts.validators.schema import validate_comments, validate_issues


BASE = "https://api.github.com"
log = get_logger(__name__)


def _headers(token: str | None) -> dict:
    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _request_with_retry(session, url: str, *, params: dict, timeout: float, max_attempts: int, backoff_seconds: float):
    # Only connection-level failures are retried; any HTTP status is returned as-is
    for attempt in range(1, max_attempts + 1):
        try:
            return session.get(url, params=params, timeout=timeout)
        except requests.RequestException as exc:
            if attempt == max_attempts:
                raise
            sleep_for = backoff_seconds * (2 ** (attempt - 1))
            log.warning(
                "request error (%s/%s) for %s: %s; retrying in %.1fs",
                attempt,
                max_attempts,
                url,
                exc,
                sleep_for,
            )
            time.sleep(sleep_for)
    raise RuntimeError("unreachable")


def _error_message(resp) -> str:
    try:
        payload = resp.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return payload["message"]
    return getattr(resp, "reason", None) or ""


class GitHubIssuesClient:
    """Issues and comments of a single repository, fetched page by page.

    One instance is built per run and shared by the fetch and enrichment
    stages. It owns the HTTP session and the credential.
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str | None = None,
        *,
        per_page: int = 100,
        state: str | None = None,
        timeout: float = 30,
        max_attempts: int = 1,
        backoff_seconds: float = 1.5,
        base_url: str = BASE,
        session=None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.per_page = per_page
        self.state = state
        self.timeout = timeout
        self.max_attempts = max(max_attempts, 1)
        self.backoff_seconds = backoff_seconds
        self.base_url = base_url.rstrip("/")
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(_headers(token))

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        self._session.close()

    @property
    def issues_url(self) -> str:
        return f"{self.base_url}/repos/{self.owner}/{self.repo}/issues"

    def comments_url(self, number: int) -> str:
        return f"{self.issues_url}/{number}/comments"

    def _get_json(self, url: str, params: dict):
        resp = _request_with_retry(
            self._session,
            url,
            params=params,
            timeout=self.timeout,
            max_attempts=self.max_attempts,
            backoff_seconds=self.backoff_seconds,
        )
        if not 200 <= resp.status_code < 300:
            message = _error_message(resp)
            log.error("error: %s %s for %s params=%s", resp.status_code, message, url, params)
            raise ApiError(resp.status_code, message, url)
        log.info("fetched %s params=%s", url, params)
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponse(f"response from {url} is not valid JSON: {e}") from e

    def iter_issue_pages(self):
        """Yield each non-empty page of issues, starting at page 1.

        Stops after the first empty page. A short page does not end the
        walk; the next request confirms exhaustion.
        """
        for page in itertools.count(1):
            params = {"per_page": self.per_page, "page": page}
            if self.state:
                params["state"] = self.state
            batch = validate_issues(self._get_json(self.issues_url, params))
            log.info("issues page=%s items=%s", page, len(batch))
            if not batch:
                return
            yield tuple(batch)

    def fetch_all_issues(self) -> tuple[Issue, ...]:
        issues = tuple(itertools.chain.from_iterable(self.iter_issue_pages()))
        log.info("fetched %s issues from %s/%s", len(issues), self.owner, self.repo)
        return issues

    def fetch_comments(self, number: int, expected: int | None = None) -> tuple[Comment, ...]:
        """Fetch the comments of issue ``number`` in server order.

        With ``expected`` (the issue's reported comment count) paging stops
        as soon as that many comments are in hand, so a thread that fits in
        one page costs one request. A short page also ends the walk, so a
        stale count never triggers an extra request for an empty page.
        """
        collected: tuple[Comment, ...] = ()
        for page in itertools.count(1):
            params = {"per_page": self.per_page, "page": page}
            batch = validate_comments(self._get_json(self.comments_url(number), params))
            collected += tuple(batch)
            if len(batch) < self.per_page or (expected is not None and len(collected) >= expected):
                break
        return collected
