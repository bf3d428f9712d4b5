from pydantic import BaseModel, TypeAdapter, ValidationError

from issue_posts.errors import MalformedResponse
from issue_posts.models import Comment, Issue

_ISSUE_PAGE = TypeAdapter(list[Issue])
_COMMENT_PAGE = TypeAdapter(list[Comment])


def _validate_page(adapter: TypeAdapter, payload, what: str) -> list[BaseModel]:
    if not isinstance(payload, list):
        raise MalformedResponse(f"expected a JSON array of {what}, got {type(payload).__name__}")
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        raise MalformedResponse(f"invalid {what} payload: {e}") from e


def validate_issues(payload) -> list[Issue]:
    return _validate_page(_ISSUE_PAGE, payload, "issues")


def validate_comments(payload) -> list[Comment]:
    return _validate_page(_COMMENT_PAGE, payload, "comments")
