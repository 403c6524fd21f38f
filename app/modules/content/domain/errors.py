"""Errors for the content module."""

from typing import Optional


class ContentError(Exception):
    """Base class for content ingestion errors."""


class ContentParseError(ContentError):
    """Raised by a decoder when a file's text cannot be turned into structured content.

    Parse errors are recoverable: the batch driver records them and keeps
    processing the remaining files.

    Attributes:
        path: repository path of the file that failed to decode
        reason: short description of the underlying failure
    """

    def __init__(self, path: str, reason: str, cause: Optional[BaseException] = None):
        super().__init__(f"{path} could not be parsed due to {reason}")
        self.path = path
        self.reason = reason
        self.cause = cause


class SiteConfigError(ContentError):
    """Raised when the site configuration cannot be read or validated."""
