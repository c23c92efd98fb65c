from __future__ import annotations

import time
from typing import Any, Awaitable, Callable, Optional, Sequence, Tuple

from .dns_lookup import resolve_raw, to_resolver_error
from .dns_records import ErrorKind, QueryResult, RecordType
from .error_classifier import classify
from .errors import ResolverError
from .formatter import format_records
from .logger import get_child_logger

log = get_child_logger("query_executor")

ResolveFn = Callable[[str, RecordType], Awaitable[Sequence[Any]]]


def _as_resolver_error(exc: Exception) -> ResolverError:
    err = to_resolver_error(exc)
    # foreign resolvers may carry a bare `.code` attribute instead
    code = getattr(exc, "code", None)
    if err.kind is ErrorKind.UNKNOWN and isinstance(code, str):
        return ResolverError(ErrorKind.from_code(code), err.message)
    return err


async def execute(
    domain: str,
    rtype: RecordType,
    resolve: Optional[ResolveFn] = None,
    trace: Tuple[str, ...] = (),
) -> QueryResult:
    """
    Run one timed lookup and return its QueryResult.

    Resolver failures come back as a failed QueryResult carrying the
    classified message; they are never raised.
    """
    resolve = resolve or resolve_raw
    start = time.perf_counter()
    try:
        raw = await resolve(domain, rtype)
    except Exception as e:
        err = _as_resolver_error(e)
        message = classify(err.kind, err.message)
        log.info("{} lookup for {} failed: {} ({})", rtype.value, domain, message, err.code)
        return QueryResult.failure(rtype, message, err.kind)
    end = time.perf_counter()

    elapsed_ms = (end - start) * 1000.0
    try:
        records = format_records(rtype, raw)
    except (TypeError, ValueError, KeyError, IndexError) as e:
        log.info("{} answer for {} could not be formatted: {}", rtype.value, domain, e)
        return QueryResult.failure(rtype, str(e) or e.__class__.__name__, ErrorKind.UNKNOWN)
    log.debug("{} lookup for {}: {} record(s) in {:.2f} ms", rtype.value, domain, len(records), elapsed_ms)
    return QueryResult.success(rtype, records, elapsed_ms, trace)
