"""
Exception taxonomy for catalog harvesting.
"""

from __future__ import annotations


class HarvestError(RuntimeError):
    """Base class for all harvesting failures."""


class PageCeilingError(HarvestError):
    """
    The search API refused a page index beyond its per-filter ceiling.
    Handled inside the crawler by shifting the price window.
    """

    def __init__(self, *, page: int, status_code: int) -> None:
        super().__init__(f"Page index {page} exceeds the ceiling for the active filter")
        self.page = page
        self.status_code = status_code


class FetchFailure(HarvestError):
    """Transport error or unexpected HTTP status for one request."""

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body


class ExtractionError(HarvestError):
    """Embedded JSON could not be isolated from a product page."""


class MissingAnchorError(ExtractionError):
    """No product id in the URL, or no matching anchor in the HTML."""


class UnbalancedJsonError(ExtractionError):
    """Input ended before the embedded object's braces balanced."""


class MalformedApiResponseError(HarvestError):
    """A payload did not have the expected shape."""
