"""
Synthetic resolution path derived from a domain's labels.

This is a lexical approximation (root -> TLD -> authoritative -> subdomain ->
queried name); no network activity is involved.
"""
from __future__ import annotations

from typing import Iterable, List, Tuple

ROOT_HOP = "Root DNS Server"


def generate_trace(domain: str) -> Tuple[str, ...]:
    """
    Build the ordered hop list for `domain`.

    >>> generate_trace("mail.example.com")
    ('Root DNS Server', 'TLD Server (.com)', 'Authoritative Server (example.com)', 'Subdomain (mail)', 'Domain Queried (mail.example.com)')
    """
    parts = domain.split(".")
    tld = parts[-1]
    second_level = parts[-2] if len(parts) >= 2 else ""
    subdomain = ".".join(parts[:-2])

    hops: List[str] = [ROOT_HOP]
    if tld:
        hops.append(f"TLD Server (.{tld})")
    if second_level:
        hops.append(f"Authoritative Server ({second_level}.{tld})")
    if subdomain:
        hops.append(f"Subdomain ({subdomain})")
    hops.append(f"Domain Queried ({domain})")
    return tuple(hops)


def merge_traces(traces: Iterable[Iterable[str]]) -> Tuple[str, ...]:
    """Flatten several traces, dropping repeated hops but keeping first-seen order."""
    seen = {}
    for trace in traces:
        for hop in trace:
            seen.setdefault(hop, None)
    return tuple(seen)
