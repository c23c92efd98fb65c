import pytest

from resolver_module.dns_records import ErrorKind, QueryEnvelope, QueryResult, RecordType
from resolver_module.errors import UnsupportedRecordTypeError
from resolver_module.render import render_envelope, render_result


def test_record_type_parse():
    assert RecordType.parse(" aaaa ") is RecordType.AAAA
    assert RecordType.parse(RecordType.MX) is RecordType.MX
    with pytest.raises(UnsupportedRecordTypeError):
        RecordType.parse("SOA")


def test_error_kind_from_code():
    assert ErrorKind.from_code("NXDOMAIN") is ErrorKind.NXDOMAIN
    assert ErrorKind.from_code("EBADNAME") is ErrorKind.UNKNOWN
    assert ErrorKind.from_code(None) is ErrorKind.UNKNOWN


def test_success_and_failure_are_exclusive():
    ok = QueryResult.success(RecordType.A, ("1.2.3.4",), 1.25)
    assert ok.ok and ok.error is None and ok.time == "1.25"
    assert ok.to_dict() == {"records": ["1.2.3.4"], "time": ok.time, "trace": []}

    bad = QueryResult.failure(RecordType.A, "DNS query timed out.", ErrorKind.TIMEOUT)
    assert not bad.ok and bad.records is None and bad.elapsed_ms is None
    assert bad.to_dict() == {"error": "DNS query timed out."}


def test_time_has_two_fraction_digits():
    assert QueryResult.success(RecordType.A, (), 12).time == "12.00"
    assert QueryResult.success(RecordType.A, (), 0.0).time == "0.00"


def test_render_envelope():
    envelope = QueryEnvelope(
        domain="example.com",
        results=(
            QueryResult.success(RecordType.A, ("1.2.3.4",), 3.5),
            QueryResult.failure(RecordType.MX, "DNS server could not find the domain.", ErrorKind.NOT_FOUND),
        ),
        trace=("Root DNS Server", "Domain Queried (example.com)"),
    )
    text = render_envelope(envelope)
    assert "A Record(s) for example.com:\n  1.2.3.4\nResponse Time: 3.50 ms" in text
    assert "MX lookup for example.com failed: DNS server could not find the domain. (Mail server not found.)" in text
    assert text.endswith("Resolution path: Root DNS Server -> Domain Queried (example.com)")
    assert render_result("example.com", QueryResult.success(RecordType.NS, (), 1)).count("(none)") == 1
