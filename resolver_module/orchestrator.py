"""
Fan out per-type lookups for one domain and assemble a QueryEnvelope.

Two schedules share the same per-query contract:
- resolve_all(): every type launched at once, joined with asyncio.gather (web)
- resolve_sequential(): one type at a time, each reported before the next (CLI)
"""
from __future__ import annotations

import asyncio
import os
from typing import Callable, Iterable, List, Optional, Tuple, Union

from .dns_records import CLI_RECORD_TYPES, WEB_RECORD_TYPES, QueryEnvelope, QueryResult, RecordType
from .dns_utils import normalize_domain, parse_record_types
from .errors import QueryValidationError, UnsupportedRecordTypeError
from .logger import get_child_logger
from .query_executor import ResolveFn, execute
from .trace import generate_trace, merge_traces

log = get_child_logger("orchestrator")

SLOW_QUERY_MS = float(os.getenv("SLOW_QUERY_MS", "200"))

TypesArg = Union[str, Iterable[Union[str, RecordType]]]


def _validate(
    domain: Optional[str],
    types: Optional[TypesArg],
    supported: Iterable[RecordType],
) -> Tuple[str, List[RecordType]]:
    """Check inputs before anything is dispatched; returns the cleaned domain and type list."""
    domain = normalize_domain(domain)
    requested = parse_record_types(types)
    if not requested:
        raise QueryValidationError("Missing record type")
    allowed = set(supported)
    for rtype in requested:
        if rtype not in allowed:
            raise UnsupportedRecordTypeError(rtype.value)
    return domain, requested


def _envelope(domain: str, results: Iterable[QueryResult]) -> QueryEnvelope:
    results = tuple(results)
    trace = merge_traces(r.trace for r in results if r.ok)
    return QueryEnvelope(domain=domain, results=results, trace=trace)


async def resolve_all(
    domain: Optional[str],
    types: Optional[TypesArg],
    resolve: Optional[ResolveFn] = None,
    supported: Iterable[RecordType] = WEB_RECORD_TYPES,
) -> QueryEnvelope:
    """
    Query every requested type for `domain` concurrently.

    Raises QueryValidationError (or UnsupportedRecordTypeError) before any
    lookup when the domain or type list is unusable. Per-type failures are
    reported inside the envelope.
    """
    domain, requested = _validate(domain, types, supported)
    trace = generate_trace(domain)

    log.info("Resolving {} for {}", ",".join(t.value for t in requested), domain)
    # execute() never raises for resolver failures, so gather joins every query
    results = await asyncio.gather(*(execute(domain, rtype, resolve, trace) for rtype in requested))
    envelope = _envelope(domain, results)
    log.info("Resolved {}: {} ok, {} failed", domain, len(envelope.succeeded), len(envelope.failed))
    return envelope


async def resolve_sequential(
    domain: Optional[str],
    types: Optional[TypesArg] = CLI_RECORD_TYPES,
    resolve: Optional[ResolveFn] = None,
    on_result: Optional[Callable[[QueryResult], None]] = None,
    slow_threshold_ms: float = SLOW_QUERY_MS,
    supported: Iterable[RecordType] = CLI_RECORD_TYPES,
) -> QueryEnvelope:
    """
    Query each type in turn; `on_result` sees every result before the next
    lookup starts. Successful queries slower than `slow_threshold_ms` are
    logged as warnings.
    """
    domain, requested = _validate(domain, types, supported)
    trace = generate_trace(domain)

    results: List[QueryResult] = []
    for rtype in requested:
        result = await execute(domain, rtype, resolve, trace)
        if result.ok and result.elapsed_ms is not None and result.elapsed_ms > slow_threshold_ms:
            log.info("Slow response for {} record: {} ms", rtype.value, result.time)
        if on_result is not None:
            on_result(result)
        results.append(result)
    return _envelope(domain, results)
