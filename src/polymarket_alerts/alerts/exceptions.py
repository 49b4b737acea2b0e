"""Errors surfaced to callers that create alert subscriptions."""

from __future__ import annotations


class AlertError(Exception):
    """Base exception for alert subscription errors."""


class UnparseableRequestError(AlertError):
    """The request text did not yield any condition."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Could not parse alert request: {text!r}")
        self.text = text


class NoMatchingMarketError(AlertError):
    """No market matched the keywords of a parsed condition."""

    def __init__(self, text: str, keywords: set[str] | None = None) -> None:
        super().__init__(f"No matching market for: {text!r}")
        self.text = text
        self.keywords = keywords or set()


class AdmissionDeniedError(AlertError):
    """The admission gate refused a condition."""
