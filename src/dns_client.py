"""
Thin DNS client over dnspython.

Issues a single typed query (MX, A, AAAA or PTR) against the configured
nameserver and returns the answer as plain RecordView tuples. An empty
answer (NXDOMAIN or no data) is an empty list; anything else dnspython
raises becomes UpstreamFailure.
"""

import logging
import socket
from typing import NamedTuple

import dns.exception
import dns.inet
import dns.rdatatype
import dns.resolver

from config import Config
from errors import UpstreamFailure

logger = logging.getLogger(__name__)

SUPPORTED_TYPES = ("MX", "A", "AAAA", "PTR")


class RecordView(NamedTuple):
    """The answer record fields the resolver consumes."""

    kind: str
    owner: str
    target: str
    priority: int | None = None


def _resolve_nameserver(nameserver: str) -> str:
    """Turn a nameserver hostname into an IP literal (literals pass through)."""
    if dns.inet.is_address(nameserver):
        return nameserver
    try:
        infos = socket.getaddrinfo(nameserver, 53, proto=socket.IPPROTO_UDP)
    except socket.gaierror as e:
        raise UpstreamFailure(
            f"Nameserver '{nameserver}' could not be resolved: {e}",
            details={"nameserver": nameserver},
        ) from e
    return infos[0][4][0]


def _to_view(owner: str, rdata) -> RecordView:
    kind = dns.rdatatype.to_text(rdata.rdtype)
    if kind == "MX":
        return RecordView(kind, owner, rdata.exchange.to_text(), rdata.preference)
    if kind == "PTR":
        return RecordView(kind, owner, rdata.target.to_text())
    # A / AAAA
    return RecordView(kind, owner, rdata.address)


class DNSClient:
    """Typed DNS queries against one nameserver (or the platform default)."""

    def __init__(self, nameserver: str | None = None, timeout: float | None = None):
        """
        Build the underlying dnspython resolver.

        Args:
            nameserver: Hostname or IP literal of the upstream server. None
                uses the system resolver configuration.
            timeout: Default lifetime in seconds for a single query.

        Raises:
            UpstreamFailure: If the nameserver cannot be resolved or no
                system configuration is available.
        """
        self.nameserver = nameserver
        self.timeout = timeout if timeout is not None else Config.DNS_TIMEOUT_SECONDS
        try:
            if nameserver is None:
                self._resolver = dns.resolver.Resolver()
            else:
                self._resolver = dns.resolver.Resolver(configure=False)
                self._resolver.nameservers = [_resolve_nameserver(nameserver)]
        except dns.exception.DNSException as e:
            raise UpstreamFailure(
                f"Could not configure DNS resolver: {e}",
                details={"nameserver": nameserver},
            ) from e
        self._resolver.lifetime = self.timeout

    def query(self, name: str, rdtype: str, lifetime: float | None = None) -> list[RecordView]:
        """
        Query one record type for a name.

        Args:
            name: Owner name to query.
            rdtype: One of "MX", "A", "AAAA", "PTR".
            lifetime: Deadline in seconds for this query (default: client timeout).

        Returns:
            Records of the requested type in server order; empty if none exist.

        Raises:
            UpstreamFailure: On timeout, server failure or an unparseable name.
        """
        if rdtype not in SUPPORTED_TYPES:
            raise ValueError(f"Unsupported record type '{rdtype}'")

        try:
            answer = self._resolver.resolve(
                name,
                rdtype,
                lifetime=lifetime if lifetime is not None else self.timeout,
                raise_on_no_answer=False,
            )
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            logger.debug(f"No {rdtype} records exist for '{name}'")
            return []
        except dns.exception.DNSException as e:
            raise UpstreamFailure(
                f"{rdtype} lookup for '{name}' failed: {e}",
                details={"name": name, "rdtype": rdtype, "nameserver": self.nameserver},
            ) from e

        rrset = answer.rrset
        if rrset is None:
            return []
        owner = rrset.name.to_text()
        return [_to_view(owner, rdata) for rdata in rrset]
