"""Exception taxonomy for the news meme service."""

from __future__ import annotations

from typing import Iterable, Optional


class NewsMemeError(Exception):
    """Base class for every failure the service reports to callers."""


class ConfigurationError(NewsMemeError):
    """Raised before any network call when required credentials are absent."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing required environment variables: {', '.join(self.missing)}"
        )


class UpstreamError(NewsMemeError):
    """An upstream API call failed in transport, status, or payload."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text


class NewsFetchError(UpstreamError):
    pass


class TemplateFetchError(UpstreamError):
    pass


class CaptionGenerationError(UpstreamError):
    pass


class MemeRenderError(UpstreamError):
    pass


class WorkflowError(NewsMemeError):
    """The composite news -> caption -> meme operation failed at some step."""


class ToolArgumentError(NewsMemeError, ValueError):
    """A tool was called with an unknown name or invalid arguments."""
