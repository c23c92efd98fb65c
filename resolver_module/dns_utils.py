# /dnspath/resolver_module/dns_utils.py
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Union

from .dns_records import RecordType
from .errors import QueryValidationError

# --------------------------------------------------------------------
# Domain validation (same pattern the browser client applies)
# --------------------------------------------------------------------
DOMAIN_RE = re.compile(r"^(?!://)([a-zA-Z0-9\-_]+\.)+[a-zA-Z]{2,}$")


def is_valid_domain(domain: Optional[str]) -> bool:
    """True for names like 'example.com' or 'mail.example.co'; bare labels and URLs fail."""
    if not domain:
        return False
    return DOMAIN_RE.fullmatch(domain) is not None


def normalize_name(value: Optional[str]) -> str:
    """Strip surrounding whitespace and the trailing root dot from a DNS name."""
    if not value:
        return ""
    return str(value).strip().rstrip(".")


def normalize_domain(domain: Optional[str]) -> str:
    """
    Clean a user-supplied domain before querying.

    Raises QueryValidationError when nothing is left.
    """
    cleaned = normalize_name(domain)
    if not cleaned:
        raise QueryValidationError("Missing domain")
    return cleaned


# --------------------------------------------------------------------
# Record type lists
# --------------------------------------------------------------------
def parse_record_types(value: Union[str, Iterable[Union[str, RecordType]], None]) -> List[RecordType]:
    """
    Parse 'A,MX' or an iterable of tags into an ordered, de-duplicated list.

    Unknown tags raise UnsupportedRecordTypeError.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Union[str, RecordType]] = [p for p in value.split(",") if p.strip()]
    else:
        items = value
    out: List[RecordType] = []
    for item in items:
        rtype = RecordType.parse(item)
        if rtype not in out:
            out.append(rtype)
    return out
