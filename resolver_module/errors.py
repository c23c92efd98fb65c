"""Exceptions raised by the resolver module."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .dns_records import ErrorKind


class ResolverModuleError(Exception):
    """Base class for all resolver module errors."""


class QueryValidationError(ResolverModuleError):
    """Domain or record types are missing or malformed; no query was run."""


class UnsupportedRecordTypeError(QueryValidationError):
    """A requested record type is outside the supported set."""

    def __init__(self, rtype: str):
        super().__init__(f"Unsupported DNS record type: {rtype}")
        self.rtype = rtype


class ResolverError(ResolverModuleError):
    """
    A single lookup failed inside the resolver.

    `kind` is the classified failure, `message` the resolver's own text which
    is shown to the user when the kind has no fixed message.
    """

    def __init__(self, kind: "ErrorKind", message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def code(self) -> str:
        return self.kind.value
