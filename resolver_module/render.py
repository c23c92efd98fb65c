"""Plain-text rendering of query results for terminal output."""
from __future__ import annotations

from typing import List

from .dns_records import QueryEnvelope, QueryResult
from .error_classifier import friendly_hint


def render_result(domain: str, result: QueryResult) -> str:
    if not result.ok:
        return f"{result.type.value} lookup for {domain} failed: {result.error} ({friendly_hint(result.type)})"
    lines = [f"{result.type.value} Record(s) for {domain}:"]
    if result.records:
        lines.extend(f"  {r}" for r in result.records)
    else:
        lines.append("  (none)")
    lines.append(f"Response Time: {result.time} ms")
    return "\n".join(lines)


def render_trace(trace) -> str:
    return " -> ".join(trace)


def render_envelope(envelope: QueryEnvelope) -> str:
    """Render every result in request order followed by the resolution path."""
    blocks: List[str] = [f"DNS records for: {envelope.domain}"]
    blocks.extend(render_result(envelope.domain, r) for r in envelope.results)
    if envelope.trace:
        blocks.append(f"Resolution path: {render_trace(envelope.trace)}")
    return "\n\n".join(blocks)
