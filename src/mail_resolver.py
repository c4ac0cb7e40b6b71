"""
Caching resolver for mail delivery lookups.

Two lookups share one bounded LRU cache:
- resolve_mail_hosts: domain -> MX targets by ascending priority, falling
  back to the domain's own A records (priority 100) when no MX exists.
- resolve_reverse_hosts: IP literal -> PTR targets in server order.

Only non-empty results are cached, so a domain or address without records
is looked up again on every call.
"""

import logging
import time

from clock import Clock
from config import Config
from dns_cache import DNSCache
from dns_client import DNSClient, RecordView
from errors import NoRecords
from reverse_map import to_reverse_name

logger = logging.getLogger(__name__)


def _host_list_string(hosts: list[str] | tuple[str, ...]) -> str:
    return ", ".join(hosts)


def _mx_candidates(records: list[RecordView]) -> list[tuple[int, str]]:
    """(priority, target) pairs for MX records and A records lifted to MX."""
    candidates = []
    for record in records:
        if record.kind == "MX":
            candidates.append((record.priority, record.target))
        elif record.kind == "A":
            candidates.append((Config.MX_FALLBACK_PRIORITY, record.owner))
    return candidates


class MailResolver:
    """
    Thread-safe caching resolver for MX and PTR lookups.

    One instance is meant to be shared by all threads. DNS queries run
    outside the cache lock, so concurrent misses on the same key may each
    query upstream; the last result stored wins.
    """

    def __init__(
        self,
        nameserver: str | None = None,
        *,
        client: DNSClient | None = None,
        cache: DNSCache | None = None,
        clock: Clock | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            nameserver: Upstream nameserver (hostname or IP literal). None uses
                the platform default.
            client: DNS client to use instead of building one from nameserver.
            cache: Cache to use instead of a fresh 128-entry, 30-minute cache.
            clock: Time source for the cache the resolver builds itself; cannot be
                combined with cache.
            timeout: Default per-query deadline in seconds.

        Raises:
            ValueError: If both cache and clock are given.
        """
        if cache is not None and clock is not None:
            raise ValueError("Pass clock to the DNSCache itself when supplying a cache")
        self._nameserver = nameserver
        self._timeout = timeout if timeout is not None else Config.DNS_TIMEOUT_SECONDS
        if client is None:
            client = DNSClient(nameserver, timeout=self._timeout)
        self._client = client
        self._cache = cache if cache is not None else DNSCache(clock=clock)
        logger.debug("Mail resolver created", extra={"nameserver": nameserver or "system default"})

    @property
    def nameserver(self) -> str | None:
        return self._nameserver

    @property
    def cache(self) -> DNSCache:
        return self._cache

    def _cached_hosts(self, key: str, kind: str) -> list[str] | None:
        """Return the cached hosts for a key if present and fresh."""
        answer = self._cache.get(key)
        if answer is None:
            logger.debug(f"Cache did NOT contain answer for {kind} '{key}'")
            return None
        if self._cache.expired(answer):
            logger.debug(
                f"Cache DID contain answer for {kind} '{key}', but was older than "
                f"{self._cache.ttl_seconds} seconds"
            )
            return None
        logger.debug(f"Cache DID contain answer for {kind} '{key}', and is not expired")
        return list(answer.hosts)

    def resolve_mail_hosts(self, domain: str, timeout: float | None = None) -> list[str]:
        """
        Resolve a domain to its mail relay hosts.

        Args:
            domain: Domain as supplied by the caller (cache key, not normalized).
            timeout: Per-query deadline in seconds (default: resolver timeout).

        Returns:
            Non-empty list of host names with trailing dots, lowest MX priority
            first; hosts with equal priority keep the server's order.

        Raises:
            NoRecords: If the domain has neither MX nor A records.
            UpstreamFailure: If a DNS query fails.
        """
        cached = self._cached_hosts(domain, "domain")
        if cached is not None:
            return cached

        lifetime = timeout if timeout is not None else self._timeout
        start_time = time.monotonic()

        records = self._client.query(domain, "MX", lifetime=lifetime)
        if not records:
            # No MX records, so punt and try the domain's own A records
            records = self._client.query(domain, "A", lifetime=lifetime)

        candidates = _mx_candidates(records)
        if not candidates:
            logger.debug(f"No MX records or A records exist for domain '{domain}'")
            raise NoRecords(
                f"No MX records or A records exist for '{domain}'",
                details={"domain": domain},
            )

        # sorted() is stable, so equal priorities keep response order
        candidates = sorted(candidates, key=lambda candidate: candidate[0])
        hosts = [target for _, target in candidates]

        logger.debug(
            f"A new MX lookup for domain '{domain}' yielded the MX hosts: "
            f"{_host_list_string(hosts)}",
            extra={
                "domain": domain,
                "hosts": hosts,
                "elapsed_ms": int((time.monotonic() - start_time) * 1000),
            },
        )
        self._cache.put(domain, self._cache.new_result(hosts))
        return hosts

    def resolve_reverse_hosts(self, ip: str, timeout: float | None = None) -> list[str]:
        """
        Resolve an IP literal to the host names its PTR records name.

        Args:
            ip: IPv4 or IPv6 literal as supplied by the caller (cache key).
            timeout: Per-query deadline in seconds (default: resolver timeout).

        Returns:
            PTR targets with trailing dots in server order; empty if none exist.

        Raises:
            BadAddress: If ip is not a valid IP literal.
            UpstreamFailure: If the DNS query fails.
        """
        cached = self._cached_hosts(ip, "address")
        if cached is not None:
            return cached

        reverse_name = to_reverse_name(ip)
        lifetime = timeout if timeout is not None else self._timeout
        start_time = time.monotonic()

        records = self._client.query(reverse_name, "PTR", lifetime=lifetime)
        hosts = [record.target for record in records if record.kind == "PTR"]
        if not hosts:
            # Empty results are never cached
            logger.debug(f"No PTR records exist for address '{ip}'", extra={"ip": ip})
            return []

        logger.debug(
            f"A new hostname lookup for address '{ip}' yielded the hosts: "
            f"{_host_list_string(hosts)}",
            extra={
                "ip": ip,
                "hosts": hosts,
                "elapsed_ms": int((time.monotonic() - start_time) * 1000),
            },
        )
        self._cache.put(ip, self._cache.new_result(hosts))
        return hosts
