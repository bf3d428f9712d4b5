# Canned GitHub responses shared by the export tests
from collections import deque


class DummyResponse:
    def __init__(self, status_code, payload, reason="OK"):
        self.status_code = status_code
        self._payload = payload
        self.reason = reason
        self.headers = {}

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class DummySession:
    """Stands in for requests.Session; answers GETs from per-URL queues.

    Once a queue runs dry the URL answers with an empty page.
    """

    def __init__(self, routes=None):
        self.routes = {url: deque(values) for url, values in (routes or {}).items()}
        self.headers = {}
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params or {})))
        queue = self.routes.get(url)
        value = queue.popleft() if queue else DummyResponse(200, [])
        if isinstance(value, Exception):
            raise value
        return value

    def close(self):
        self.closed = True

    def pages_requested(self, url):
        return [params.get("page") for called, params in self.calls if called == url]


def issue_json(number, *, comments=0, labels=(), title=None, body="Body", created_at="2023-03-05T10:00:00Z", **extra):
    rec = {
        "id": 1000 + number,
        "number": number,
        "title": title or f"Issue {number}",
        "body": body,
        "created_at": created_at,
        "updated_at": created_at,
        "comments": comments,
        "labels": [{"id": i, "name": name, "color": "ffffff", "description": None} for i, name in enumerate(labels)],
        "user": {"login": "octocat"},
        "state": "open",
    }
    rec.update(extra)
    return rec


def comment_json(comment_id, body=None):
    return {"id": comment_id, "body": body or f"comment {comment_id}", "user": {"login": "octocat"}}

