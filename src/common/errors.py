"""Error types shared by the ingest job and the reporting API."""

from __future__ import annotations


class NewWordsError(Exception):
    """Base class for errors surfaced to callers."""


class NetworkError(NewWordsError):
    """Feed or search endpoint unreachable, timed out, or returned a non-success status."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        body_excerpt: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body_excerpt = body_excerpt

    def __str__(self) -> str:
        message = super().__str__()
        if self.status is not None:
            message = f"{message} (status={self.status})"
        if self.body_excerpt:
            message = f"{message}: {self.body_excerpt}"
        return message


class StoreError(NewWordsError):
    """Word count store unreachable or rejected an operation."""


class ValidationError(NewWordsError):
    """Malformed input rejected before any fetch."""
