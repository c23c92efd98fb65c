import asyncio
from types import SimpleNamespace

import dns.exception
import dns.name
import dns.resolver
import pytest

from resolver_module import dns_lookup
from resolver_module.dns_records import ErrorKind, MxEntry, RecordType
from resolver_module.errors import ResolverError


class StubDnsResolver:
    """Mimics dns.asyncresolver.Resolver.resolve for a single canned answer."""

    def __init__(self, answer=None, exc=None):
        self.answer = answer or []
        self.exc = exc
        self.queries = []

    async def resolve(self, name, rdtype):
        self.queries.append((name, rdtype))
        if self.exc is not None:
            raise self.exc
        return self.answer


def _run(rtype, answer=None, exc=None):
    stub = StubDnsResolver(answer, exc)
    return asyncio.run(dns_lookup.resolve_raw("example.com", rtype, resolver=stub))


def test_a_records_are_addresses():
    answer = [SimpleNamespace(address="93.184.216.34"), SimpleNamespace(address="93.184.216.35")]
    assert _run(RecordType.A, answer) == ["93.184.216.34", "93.184.216.35"]


def test_ns_targets_lose_trailing_dot():
    answer = [SimpleNamespace(target=dns.name.from_text("a.iana-servers.net."))]
    assert _run("NS", answer) == ["a.iana-servers.net"]


def test_mx_entries():
    answer = [SimpleNamespace(exchange=dns.name.from_text("mail.example.com."), preference=10)]
    assert _run(RecordType.MX, answer) == [MxEntry("mail.example.com", 10)]


def test_txt_chunks_decoded():
    answer = [SimpleNamespace(strings=(b"v=spf1 ", b"-all"))]
    assert _run(RecordType.TXT, answer) == [["v=spf1 ", "-all"]]


@pytest.mark.parametrize(
    "exc,kind",
    [
        (dns.resolver.NXDOMAIN(), ErrorKind.NXDOMAIN),
        (dns.resolver.NoAnswer(), ErrorKind.NOT_FOUND),
        (dns.exception.Timeout(), ErrorKind.TIMEOUT),
        (dns.resolver.NoNameservers(), ErrorKind.SERVER_FAILURE),
        (ConnectionRefusedError("refused"), ErrorKind.CONNECTION_REFUSED),
        (dns.exception.DNSException("something odd"), ErrorKind.UNKNOWN),
    ],
)
def test_failures_raise_classified_resolver_error(exc, kind):
    with pytest.raises(ResolverError) as info:
        _run(RecordType.A, exc=exc)
    assert info.value.kind is kind
    assert info.value.code == kind.value


def test_refused_nameserver_maps_to_connection_refused():
    exc = dns.resolver.NoNameservers(
        request=SimpleNamespace(question="example.com. IN A"),
        errors=[("127.0.0.1", False, 53, ConnectionRefusedError(), None)],
    )
    assert dns_lookup.to_resolver_error(exc).kind is ErrorKind.CONNECTION_REFUSED


def test_unknown_error_keeps_message():
    err = dns_lookup.to_resolver_error(ValueError("bad label"))
    assert err.kind is ErrorKind.UNKNOWN
    assert err.message == "bad label"


def test_default_resolver_uses_env_nameservers(monkeypatch):
    monkeypatch.setenv("DNS_NAMESERVERS", "9.9.9.9, 1.1.1.1")
    dns_lookup.set_default_resolver(None)
    try:
        resolver = dns_lookup.get_default_resolver()
        assert list(resolver.nameservers) == ["9.9.9.9", "1.1.1.1"]
        assert dns_lookup.get_default_resolver() is resolver
    finally:
        dns_lookup.set_default_resolver(None)
