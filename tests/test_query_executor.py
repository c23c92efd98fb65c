import asyncio
import re

import dns.resolver

from resolver_module.dns_records import ErrorKind, MxEntry, RecordType
from resolver_module.errors import ResolverError
from resolver_module.query_executor import execute

from conftest import FakeResolver


class CodedError(Exception):
    def __init__(self, code, message):
        super().__init__(message)
        self.code = code


def test_success_carries_records_time_and_trace():
    resolver = FakeResolver({RecordType.MX: [MxEntry("mail.example.com", 10)]})
    result = asyncio.run(execute("example.com", RecordType.MX, resolver, trace=("Root DNS Server",)))
    assert result.ok
    assert result.records == ("mail.example.com (Priority: 10)",)
    assert result.error is None
    assert result.elapsed_ms >= 0
    assert re.fullmatch(r"\d+\.\d{2}", result.time)
    assert result.trace == ("Root DNS Server",)


def test_resolver_error_is_classified():
    resolver = FakeResolver({RecordType.A: ResolverError(ErrorKind.TIMEOUT, "queryA ETIMEOUT example.com")})
    result = asyncio.run(execute("example.com", RecordType.A, resolver))
    assert not result.ok
    assert result.error == "DNS query timed out."
    assert result.error_kind is ErrorKind.TIMEOUT
    assert result.records is None
    assert result.elapsed_ms is None
    assert result.time is None


def test_dnspython_exception_is_classified():
    resolver = FakeResolver({RecordType.A: dns.resolver.NXDOMAIN()})
    result = asyncio.run(execute("nope.invalid", RecordType.A, resolver))
    assert result.error == "The domain does not exist (NXDOMAIN)."


def test_foreign_error_code_attribute_is_honoured():
    resolver = FakeResolver({RecordType.NS: CodedError("SERVFAIL", "queryNs SERVFAIL example.com")})
    result = asyncio.run(execute("example.com", RecordType.NS, resolver))
    assert result.error == "DNS server failed to resolve the query."


def test_unknown_error_passes_raw_message_through():
    resolver = FakeResolver({RecordType.A: CodedError("EREFUSED", "queryA EREFUSED example.com")})
    result = asyncio.run(execute("example.com", RecordType.A, resolver))
    assert result.error == "queryA EREFUSED example.com"
    assert result.error_kind is ErrorKind.UNKNOWN
