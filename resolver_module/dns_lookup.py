"""
Resolver capability backed by dnspython's async resolver.

This module provides:
- Single resolver per process (configurable by application or env)
- resolve_raw(): one lookup for one record type, returning raw answers
- Translation of dnspython / socket failures into ResolverError(ErrorKind)

Nothing here is cached or retried; each call is one resolver round.
"""
from __future__ import annotations

import os
from typing import Any, List, Optional, Union

import dns.asyncresolver
import dns.exception
import dns.rdatatype
import dns.resolver
from dotenv import load_dotenv

from .dns_records import ErrorKind, MxEntry, RecordType
from .dns_utils import normalize_name
from .errors import ResolverError
from .logger import get_child_logger

load_dotenv()

log = get_child_logger("dns_lookup")

DEFAULT_TIMEOUT_S = float(os.getenv("DNS_TIMEOUT", "3.0"))
DEFAULT_LIFETIME_S = float(os.getenv("DNS_LIFETIME", "5.0"))

# Backing store for application-injected resolver
_default_resolver: Optional[dns.asyncresolver.Resolver] = None


def _env_nameservers() -> List[str]:
    ns_env = os.getenv("DNS_NAMESERVERS", "")
    return [s.strip() for s in ns_env.split(",") if s.strip()]


def set_default_resolver(resolver: Optional[dns.asyncresolver.Resolver]) -> None:
    """
    Set the resolver used by get_default_resolver(). Passing None drops the
    current one so the next call builds a fresh resolver.
    """
    global _default_resolver
    _default_resolver = resolver
    if resolver is not None:
        log.info("Default resolver injected by application (nameservers={})", getattr(resolver, "nameservers", None))


def get_default_resolver(nameservers: Optional[List[str]] = None) -> dns.asyncresolver.Resolver:
    """
    Get or create the default resolver for this process.

    Args:
        nameservers: List of nameserver IPs. Defaults to DNS_NAMESERVERS, then
            the system resolver configuration.

    Returns:
        Configured dnspython async resolver.
    """
    global _default_resolver

    if _default_resolver is None:
        nameservers = nameservers or _env_nameservers()
        resolver = dns.asyncresolver.Resolver(configure=not nameservers)
        if nameservers:
            resolver.nameservers = nameservers
        resolver.timeout = DEFAULT_TIMEOUT_S
        resolver.lifetime = DEFAULT_LIFETIME_S
        _default_resolver = resolver
        log.info(
            "Created default resolver with nameservers: {} (timeout={} lifetime={})",
            resolver.nameservers,
            resolver.timeout,
            resolver.lifetime,
        )

    return _default_resolver


def _extract_answers(rtype: RecordType, answer: Any) -> List[Any]:
    """Pull raw values out of a dnspython answer for one record type."""
    if rtype in (RecordType.A, RecordType.AAAA):
        return [str(rdata.address) for rdata in answer]
    elif rtype in (RecordType.NS, RecordType.CNAME):
        return [normalize_name(rdata.target.to_text()) for rdata in answer]
    elif rtype is RecordType.MX:
        return [MxEntry(normalize_name(rdata.exchange.to_text()), int(rdata.preference)) for rdata in answer]
    elif rtype is RecordType.TXT:
        return [[chunk.decode("utf-8", errors="replace") for chunk in rdata.strings] for rdata in answer]
    raise ValueError(f"Unhandled record type {rtype!r}")


def _nameserver_errors_refused(exc: dns.resolver.NoNameservers) -> bool:
    # errors: (nameserver, tcp, port, exception-or-text, answer)
    for err in exc.kwargs.get("errors") or []:
        detail = err[3] if len(err) > 3 else None
        if isinstance(detail, ConnectionRefusedError):
            return True
    return False


def to_resolver_error(exc: BaseException) -> ResolverError:
    """Map a dnspython or socket exception onto a classified ResolverError."""
    if isinstance(exc, ResolverError):
        return exc
    if isinstance(exc, dns.resolver.NXDOMAIN):
        return ResolverError(ErrorKind.NXDOMAIN, str(exc))
    if isinstance(exc, dns.resolver.NoAnswer):
        return ResolverError(ErrorKind.NOT_FOUND, str(exc))
    if isinstance(exc, dns.exception.Timeout):
        return ResolverError(ErrorKind.TIMEOUT, str(exc))
    if isinstance(exc, dns.resolver.NoNameservers):
        if _nameserver_errors_refused(exc):
            return ResolverError(ErrorKind.CONNECTION_REFUSED, str(exc))
        return ResolverError(ErrorKind.SERVER_FAILURE, str(exc))
    if isinstance(exc, ConnectionRefusedError):
        return ResolverError(ErrorKind.CONNECTION_REFUSED, str(exc))
    return ResolverError(ErrorKind.UNKNOWN, str(exc) or exc.__class__.__name__)


async def resolve_raw(
    domain: str,
    rtype: Union[RecordType, str],
    resolver: Optional[dns.asyncresolver.Resolver] = None,
) -> List[Any]:
    """
    Perform one DNS lookup and return the raw answers.

    A/AAAA/NS/CNAME give strings, MX gives MxEntry, TXT gives a list of
    character-string chunks per record. Failures raise ResolverError.
    """
    rtype = RecordType.parse(rtype)
    if resolver is None:
        resolver = get_default_resolver()

    rdtype = dns.rdatatype.from_text(rtype.value)
    try:
        answer = await resolver.resolve(domain, rdtype)
    except (dns.exception.DNSException, OSError) as e:
        err = to_resolver_error(e)
        log.debug("lookup {} {} failed: {} ({})", rtype.value, domain, err.code, err.message)
        raise err from e

    return _extract_answers(rtype, answer)
