"""Failures that abort an export run."""


class ExportError(Exception):
    pass


class ApiError(ExportError):
    """Non-2xx response from the GitHub REST API."""

    def __init__(self, status_code: int, message: str, url: str | None = None) -> None:
        super().__init__(f"GitHub API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.url = url


class MalformedResponse(ExportError):
    """Response body that is not JSON or does not match the issue shape."""


class OutputDirectoryError(ExportError):
    pass


class ConfigError(ExportError):
    pass
