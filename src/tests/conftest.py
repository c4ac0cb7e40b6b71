"""
Pytest configuration and fixtures for resolver tests.
"""

import os
import sys
import threading

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from clock import FrozenClock  # noqa: E402
from dns_cache import DNSCache  # noqa: E402
from dns_client import RecordView  # noqa: E402
from mail_resolver import MailResolver  # noqa: E402


class StubDNSClient:
    """
    In-memory stand-in for DNSClient.

    Answers come from a (name, rdtype) -> records map; a value that is an
    exception instance is raised instead. Unknown queries answer empty.
    Every query is recorded in `calls`.
    """

    def __init__(self) -> None:
        self.responses: dict[tuple[str, str], list[RecordView] | Exception] = {}
        self.calls: list[tuple[str, str, float | None]] = []
        self._lock = threading.Lock()

    def add(self, name: str, rdtype: str, answer: list[RecordView] | Exception) -> None:
        self.responses[(name, rdtype)] = answer

    def add_mx(self, domain: str, *mx: tuple[int, str]) -> None:
        owner = domain if domain.endswith(".") else domain + "."
        self.add(domain, "MX", [RecordView("MX", owner, target, prio) for prio, target in mx])

    def add_a(self, domain: str, *addresses: str) -> None:
        owner = domain if domain.endswith(".") else domain + "."
        self.add(domain, "A", [RecordView("A", owner, address) for address in addresses])

    def add_ptr(self, reverse_name: str, *targets: str) -> None:
        self.add(reverse_name, "PTR", [RecordView("PTR", reverse_name, t) for t in targets])

    def query(self, name: str, rdtype: str, lifetime: float | None = None) -> list[RecordView]:
        with self._lock:
            self.calls.append((name, rdtype, lifetime))
        answer = self.responses.get((name, rdtype), [])
        if isinstance(answer, Exception):
            raise answer
        return list(answer)

    def count(self, name: str, rdtype: str) -> int:
        with self._lock:
            return sum(1 for n, t, _ in self.calls if n == name and t == rdtype)


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen at an arbitrary non-zero instant."""
    return FrozenClock(start_ms=1_000_000)


@pytest.fixture
def stub_client() -> StubDNSClient:
    return StubDNSClient()


@pytest.fixture
def cache(clock: FrozenClock) -> DNSCache:
    return DNSCache(clock=clock)


@pytest.fixture
def resolver(stub_client: StubDNSClient, cache: DNSCache) -> MailResolver:
    """Resolver wired to the stub client and frozen-clock cache."""
    return MailResolver(client=stub_client, cache=cache, timeout=2.0)
