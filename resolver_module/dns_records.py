# /dnspath/resolver_module/dns_records.py
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

from .errors import UnsupportedRecordTypeError


class RecordType(enum.Enum):
    A = "A"
    AAAA = "AAAA"
    MX = "MX"
    NS = "NS"
    CNAME = "CNAME"
    TXT = "TXT"

    @classmethod
    def parse(cls, value: Union[str, "RecordType"]) -> "RecordType":
        """Parse a case-insensitive record type tag."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise UnsupportedRecordTypeError(str(value)) from None


class ErrorKind(enum.Enum):
    """Resolver failure classes, valued by their resolver error codes."""
    TIMEOUT = "ETIMEOUT"
    NOT_FOUND = "ENOTFOUND"
    NXDOMAIN = "NXDOMAIN"
    CONNECTION_REFUSED = "ECONNREFUSED"
    SERVER_FAILURE = "SERVFAIL"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_code(cls, code: Union[str, "ErrorKind", None]) -> "ErrorKind":
        if isinstance(code, cls):
            return code
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


# Types served by the HTTP endpoints. TXT is only queried by the CLI.
WEB_RECORD_TYPES: Tuple[RecordType, ...] = (
    RecordType.A,
    RecordType.AAAA,
    RecordType.MX,
    RecordType.NS,
    RecordType.CNAME,
)

# CLI query order
CLI_RECORD_TYPES: Tuple[RecordType, ...] = (
    RecordType.A,
    RecordType.AAAA,
    RecordType.MX,
    RecordType.NS,
    RecordType.TXT,
    RecordType.CNAME,
)

# Preselected types when the web caller names none
DEFAULT_WEB_TYPES: Tuple[RecordType, ...] = (RecordType.A, RecordType.MX)


class MxEntry(NamedTuple):
    exchange: str
    priority: int


@dataclass(frozen=True)
class QueryResult:
    """
    Outcome of one (domain, record type) lookup.

    Either `records` and `elapsed_ms` are set (success) or `error` is set
    (failure), never both. Build with `success()` / `failure()`.
    """
    type: RecordType
    records: Optional[Tuple[str, ...]] = None
    elapsed_ms: Optional[float] = None
    trace: Tuple[str, ...] = ()
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def success(
        cls,
        rtype: RecordType,
        records: Tuple[str, ...],
        elapsed_ms: float,
        trace: Tuple[str, ...] = (),
    ) -> "QueryResult":
        return cls(type=rtype, records=tuple(records), elapsed_ms=max(0.0, float(elapsed_ms)), trace=tuple(trace))

    @classmethod
    def failure(cls, rtype: RecordType, error: str, kind: ErrorKind = ErrorKind.UNKNOWN) -> "QueryResult":
        return cls(type=rtype, error=error, error_kind=kind)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def time(self) -> Optional[str]:
        """Elapsed milliseconds with two fraction digits, e.g. '12.34'."""
        if self.elapsed_ms is None:
            return None
        return f"{self.elapsed_ms:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        if not self.ok:
            return {"error": self.error}
        return {"records": list(self.records or ()), "time": self.time, "trace": list(self.trace)}


@dataclass(frozen=True)
class QueryEnvelope:
    """All results of one domain query session, in request order."""
    domain: str
    results: Tuple[QueryResult, ...] = field(default_factory=tuple)
    trace: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> List[QueryResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> List[QueryResult]:
        return [r for r in self.results if not r.ok]

    def result_for(self, rtype: RecordType) -> Optional[QueryResult]:
        for r in self.results:
            if r.type is rtype:
                return r
        return None

    def to_dict(self) -> Dict[str, Any]:
        # imported here: error_classifier depends on this module
        from .error_classifier import friendly_hint

        results: List[Dict[str, Any]] = []
        for r in self.results:
            if r.ok:
                results.append({"type": r.type.value, "records": list(r.records or ()), "time": r.time})
            else:
                results.append({"type": r.type.value, "error": r.error, "hint": friendly_hint(r.type)})
        return {"domain": self.domain, "results": results, "trace": list(self.trace)}
