from typing import Optional


class ScoringError(Exception):
    """Base exception for the submission scoring pipeline."""
    pass


class InvalidUrl(ScoringError):
    """Raised when a repository URL cannot be split into owner and repo."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid GitHub URL format: {url!r}")


class MetadataFetchFailure(ScoringError):
    """Raised when the repository summary lookup fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class CompletionApiFailure(ScoringError):
    """Raised when the chat-completion endpoint errors or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)

    @property
    def rate_limited(self) -> bool:
        # 429 covers both request rate limits and exhausted quota
        return self.status_code == 429


class MalformedResponse(ScoringError):
    """Raised when the completion reply is not a usable score object."""
    pass
