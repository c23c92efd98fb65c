import os
import sys

import pytest

# Ensure the repository root is importable without installing
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from resolver_module.dns_records import ErrorKind, MxEntry, RecordType  # noqa: E402
from resolver_module.errors import ResolverError  # noqa: E402


class FakeResolver:
    """
    Async stand-in for the DNS resolver.

    `answers` maps RecordType to raw answers or to an exception to raise.
    Every call is recorded in `calls`.
    """

    def __init__(self, answers=None):
        self.answers = answers or {}
        self.calls = []

    async def __call__(self, domain, rtype):
        self.calls.append((domain, rtype))
        outcome = self.answers.get(rtype, [])
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def example_answers():
    return {
        RecordType.A: ["93.184.216.34"],
        RecordType.AAAA: ["2606:2800:220:1:248:1893:25c8:1946"],
        RecordType.MX: [MxEntry("mail.example.com", 10)],
        RecordType.NS: ["a.iana-servers.net", "b.iana-servers.net"],
        RecordType.CNAME: ResolverError(ErrorKind.NOT_FOUND, "queryCname ENODATA example.com"),
        RecordType.TXT: [["v=spf1 -all"]],
    }


@pytest.fixture
def fake_resolver(example_answers):
    return FakeResolver(example_answers)
