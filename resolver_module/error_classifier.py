"""
Map resolver failures onto the fixed user-facing messages.

The table below is the only place the messages are defined; callers pass
either an ErrorKind or the raw resolver code.
"""
from __future__ import annotations

from typing import Dict, Union

from .dns_records import ErrorKind, RecordType

ERROR_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.TIMEOUT: "DNS query timed out.",
    ErrorKind.NOT_FOUND: "DNS server could not find the domain.",
    ErrorKind.NXDOMAIN: "The domain does not exist (NXDOMAIN).",
    ErrorKind.CONNECTION_REFUSED: "Connection refused by DNS server.",
    ErrorKind.SERVER_FAILURE: "DNS server failed to resolve the query.",
}

# Shown next to a failed record type
FRIENDLY_HINTS: Dict[RecordType, str] = {
    RecordType.A: "IP address resolution failed.",
    RecordType.AAAA: "IPv6 address not found.",
    RecordType.MX: "Mail server not found.",
    RecordType.NS: "Nameserver lookup failed",
    RecordType.CNAME: "Couldn't retrieve CNAME records. Try again later.",
}
DEFAULT_HINT = "No records found."


def classify(code: Union[ErrorKind, str, None], fallback_message: str) -> str:
    """Return the user-facing message for `code`, or `fallback_message` when unmapped."""
    return ERROR_MESSAGES.get(ErrorKind.from_code(code), fallback_message)


def friendly_hint(rtype: RecordType) -> str:
    return FRIENDLY_HINTS.get(rtype, DEFAULT_HINT)
