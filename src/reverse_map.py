"""
Reverse-lookup names for IP literals (in-addr.arpa / ip6.arpa).
"""

import dns.exception
import dns.ipv6
import dns.name
import dns.reversename

from errors import BadAddress


def _ipv6_reverse_name(ip: str) -> dns.name.Name:
    # Every IPv6 form, IPv4-mapped included, gets 32 nibbles under ip6.arpa
    nibbles = dns.ipv6.inet_aton(ip).hex()
    return dns.name.from_text(
        ".".join(reversed(nibbles)), origin=dns.reversename.ipv6_reverse_domain
    )


def to_reverse_name(ip: str) -> str:
    """
    Convert an IPv4 or IPv6 literal into its reverse-lookup name.

    Args:
        ip: Address literal, e.g. "192.0.2.17" or "2607:f8b0:4009:80e::200e".

    Returns:
        Absolute reverse name with trailing dot, e.g. "17.2.0.192.in-addr.arpa.".

    Raises:
        BadAddress: If the literal is not a valid IPv4 or IPv6 address.
    """
    if not ip:
        raise BadAddress("Empty IP address", details={"ip": ip})
    try:
        if ":" in ip:
            name = _ipv6_reverse_name(ip)
        else:
            name = dns.reversename.from_address(ip)
    except (dns.exception.SyntaxError, ValueError) as e:
        raise BadAddress(f"Invalid IP address '{ip}'", details={"ip": ip}) from e
    return name.to_text()
