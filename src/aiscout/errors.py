"""Exception hierarchy for AIScout."""

from __future__ import annotations


class AIScoutError(Exception):
    """Base exception for AIScout errors."""

    pass


class ExtractionError(AIScoutError):
    """Raised when there is no document or page to extract components from."""

    pass


class PageCaptureError(AIScoutError):
    """Raised when a live page cannot be loaded or snapshotted."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class InvalidSelectorError(AIScoutError):
    """Raised when an exclusion selector cannot be parsed."""

    def __init__(self, selector: str, reason: str = "") -> None:
        message = f"Invalid selector: {selector!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.selector = selector


class TranslationError(AIScoutError):
    """Raised when step translation preconditions are not met."""

    pass


class GenerationError(AIScoutError):
    """Raised when scenario text could not be obtained from the text generator."""

    pass
