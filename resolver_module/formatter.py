from __future__ import annotations

from typing import Any, Sequence, Tuple

from .dns_records import MxEntry, RecordType


def _format_mx(entry: Any) -> str:
    if isinstance(entry, MxEntry):
        exchange, priority = entry.exchange, entry.priority
    elif isinstance(entry, dict):
        exchange, priority = entry["exchange"], entry["priority"]
    else:
        exchange, priority = entry
    return f"{exchange} (Priority: {priority})"


def _format_txt(entry: Any) -> str:
    # TXT rdata may arrive as its character-string chunks
    if isinstance(entry, str):
        return entry
    if isinstance(entry, bytes):
        return entry.decode("utf-8", errors="replace")
    return "".join(c.decode("utf-8", errors="replace") if isinstance(c, bytes) else str(c) for c in entry)


def format_records(rtype: RecordType, raw: Sequence[Any]) -> Tuple[str, ...]:
    """Normalize raw resolver output into display strings, one per record, order kept."""
    if rtype in (RecordType.A, RecordType.AAAA, RecordType.NS, RecordType.CNAME):
        return tuple(str(r) for r in raw)
    elif rtype is RecordType.MX:
        return tuple(_format_mx(r) for r in raw)
    elif rtype is RecordType.TXT:
        return tuple(_format_txt(r) for r in raw)
    raise ValueError(f"No formatter for record type {rtype!r}")
