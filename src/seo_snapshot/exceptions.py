"""Errors raised by the snapshot pipeline."""

from typing import Optional

from seo_snapshot.constants import BLOCKED_MESSAGE, FAILURE_MESSAGE, MISSING_URL_MESSAGE


class SnapshotError(Exception):
    """Base class for snapshot failures reported to the caller."""

    message = FAILURE_MESSAGE

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class MissingInputError(SnapshotError):
    """Raised when no URL was supplied."""

    message = MISSING_URL_MESSAGE


class BlockedError(SnapshotError):
    """Raised when the primary fetch hit a bot-check or an error status."""

    message = BLOCKED_MESSAGE

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        self.status_code = status_code
        self.reason = reason
        super().__init__(message)


class AcquisitionError(SnapshotError):
    """Raised when a page could not be fetched (transport failure)."""

    def __init__(self, message: Optional[str] = None, url: Optional[str] = None):
        self.url = url
        super().__init__(message)

    @property
    def detail(self) -> str:
        """Underlying error message, for diagnostics."""
        cause = self.__cause__
        if cause is not None:
            return str(cause) or type(cause).__name__
        return self.message
