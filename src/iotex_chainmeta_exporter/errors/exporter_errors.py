"""ExporterError — base exception class for all exporter errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from iotex_chainmeta_exporter.errors.fetch_errors import FetchError


class ExporterError(Exception):
    """Base error for all exporter operations.

    Attributes:
        message: Human-readable error description.
        status_code: Suggested HTTP status code.
        code: Machine-readable error code string.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        code: str = "exporter-error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class ScrapeError(ExporterError):
    """A scrape that produced no samples because the fetch failed.

    Wraps exactly one :class:`FetchError`, available as :attr:`error` and as
    ``__cause__``.
    """

    def __init__(self, error: FetchError, *, endpoint: str = "") -> None:
        message = f"scrape of {endpoint} failed: {error.message}" if endpoint else error.message
        super().__init__(message, status_code=503, code="scrape-failed")
        self.error = error
        self.endpoint = endpoint
        self.__cause__ = error

    @property
    def cause(self) -> str:
        """Return the underlying fetch failure cause."""
        return self.error.cause.value
