"""Interpreting DNS replies and pacing the dial attempts made after a lookup."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable

import dns.flags
import dns.message
import dns.rcode
import dns.rdatatype

NO_SUCH_HOST = "no such host"
LAME_REFERRAL = "lame referral"
SERVER_MISBEHAVING = "server misbehaving"
TIMEOUT = "i/o timeout"

SANE_MINIMUM_SECONDS = 2.0

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


class DnsLookupError(Exception):
    """A failed name lookup, with the flags that describe why it failed."""

    def __init__(
        self,
        err: str,
        name: str = "",
        server: str = "",
        *,
        is_timeout: bool = False,
        is_temporary: bool = False,
        is_not_found: bool = False,
    ) -> None:
        super().__init__(err)
        self.err = err
        self.name = name
        self.server = server
        self.is_timeout = is_timeout
        self.is_temporary = is_temporary
        self.is_not_found = is_not_found

    def __str__(self) -> str:
        text = f"lookup {self.name}"
        if self.server:
            text += f" on {self.server}"
        return f"{text}: {self.err}"


def _question_name(response: dns.message.Message) -> str:
    if response.question:
        return response.question[0].name.to_text()
    return ""


def check_header(response: dns.message.Message) -> None:
    """Raise :class:`DnsLookupError` if the reply's header reports a failure."""
    name = _question_name(response)
    rcode = response.rcode()
    if rcode == dns.rcode.NXDOMAIN:
        raise DnsLookupError(NO_SUCH_HOST, name, is_not_found=True)

    flags = response.flags
    if (
        rcode == dns.rcode.NOERROR
        and not flags & dns.flags.AA
        and not flags & dns.flags.RA
        and not response.answer
    ):
        raise DnsLookupError(LAME_REFERRAL, name)

    if rcode != dns.rcode.NOERROR:
        raise DnsLookupError(
            SERVER_MISBEHAVING,
            name,
            is_temporary=rcode == dns.rcode.SERVFAIL,
        )


def answer_addresses(response: dns.message.Message, qtype) -> list[IPAddress]:
    """Addresses from the answer section, starting at the first record of ``qtype``.

    Raises :class:`DnsLookupError` (not found) when no answer has that type.
    """
    wanted = dns.rdatatype.RdataType.make(qtype)
    rrsets = list(response.answer)
    start = next(
        (index for index, rrset in enumerate(rrsets) if rrset.rdtype == wanted),
        None,
    )
    if start is None:
        raise DnsLookupError(NO_SUCH_HOST, _question_name(response), is_not_found=True)

    addresses: list[IPAddress] = []
    for rrset in rrsets[start:]:
        if rrset.rdtype not in (dns.rdatatype.A, dns.rdatatype.AAAA):
            continue
        addresses.extend(ipaddress.ip_address(rdata.address) for rdata in rrset)
    return addresses


def partial_deadline(
    now: float, deadline: float | None, addrs_remaining: int
) -> float | None:
    """Share the time left before ``deadline`` among the addresses still to try.

    Times are in seconds. A ``deadline`` of None means there is none.
    Each attempt gets at least two seconds unless less than that remains.
    """
    if deadline is None:
        return None
    time_remaining = deadline - now
    if time_remaining <= 0:
        raise TimeoutError(TIMEOUT)
    timeout = time_remaining / addrs_remaining
    if timeout < SANE_MINIMUM_SECONDS:
        timeout = min(time_remaining, SANE_MINIMUM_SECONDS)
    return now + timeout


def order_addresses(
    addrs_v4: Iterable, addrs_v6: Iterable, has_v6: bool
) -> list[str]:
    """Put IPv6 addresses first when IPv6 is enabled, IPv4 first otherwise."""
    v4 = [str(ipaddress.ip_address(addr)) for addr in addrs_v4]
    v6 = [str(ipaddress.ip_address(addr)) for addr in addrs_v6]
    return v6 + v4 if has_v6 else v4 + v6