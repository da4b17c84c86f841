"""Building and matching the DNS queries used to resolve host names."""

from __future__ import annotations

import re
import secrets
from typing import Union

import dns.exception
import dns.flags
import dns.message
import dns.name
import dns.rdataclass
import dns.rdatatype

_MAX_NAME_LENGTH = 254
_MAX_LABEL_LENGTH = 63

_PROTO_SPLITTER = re.compile(r"(tcp|udp|ping)(4|6)?")

_UPPER = bytes(range(ord("A"), ord("Z") + 1))
_LOWER = bytes(range(ord("a"), ord("z") + 1))
_ASCII_FOLD = bytes.maketrans(_UPPER, _LOWER)

NameLike = Union[str, bytes, dns.name.Name]


def is_domain_name(s: str) -> bool:
    """Report whether ``s`` is a syntactically valid, non-numeric host name."""
    length = len(s)
    if length == 0 or length > _MAX_NAME_LENGTH:
        return False
    if length == _MAX_NAME_LENGTH and not s.endswith("."):
        return False

    last = "."
    non_numeric = False
    part_len = 0
    for c in s:
        if "a" <= c <= "z" or "A" <= c <= "Z" or c == "_":
            non_numeric = True
            part_len += 1
        elif "0" <= c <= "9":
            part_len += 1
        elif c == "-":
            if last == ".":
                return False
            part_len += 1
            non_numeric = True
        elif c == ".":
            if last in ".-":
                return False
            if part_len == 0 or part_len > _MAX_LABEL_LENGTH:
                return False
            part_len = 0
        else:
            return False
        last = c
    if last == "-" or part_len > _MAX_LABEL_LENGTH:
        return False
    return non_numeric


def split_network(network: str) -> tuple[str, bool, bool]:
    """Split a network such as "tcp4" into (protocol, accept IPv4, accept IPv6)."""
    match = _PROTO_SPLITTER.fullmatch(network)
    if match is None:
        raise ValueError(f"unknown network {network}")
    proto, family = match.groups()
    if family is None:
        return proto, True, True
    accept_v4 = family == "4"
    return proto, accept_v4, not accept_v4


def new_request(name: NameLike, qtype) -> tuple[int, bytes, bytes]:
    """Build a recursive IN query for ``name``.

    Returns the random message id, the datagram form of the query and the
    stream form, which carries a two-byte big-endian length prefix.
    """
    try:
        qname = name if isinstance(name, dns.name.Name) else dns.name.from_text(
            name.decode("ascii") if isinstance(name, bytes) else name
        )
        rdtype = dns.rdatatype.RdataType.make(qtype)
        message = dns.message.make_query(qname, rdtype, dns.rdataclass.IN)
        message.flags = dns.flags.RD
        message.id = secrets.randbits(16)
        udp_req = message.to_wire()
    except (dns.exception.DNSException, UnicodeError, ValueError) as err:
        raise ValueError("cannot marshal DNS message") from err
    tcp_req = len(udp_req).to_bytes(2, "big") + udp_req
    return message.id, udp_req, tcp_req


def _name_bytes(name: NameLike) -> bytes:
    if isinstance(name, dns.name.Name):
        return name.to_text().encode("utf-8")
    if isinstance(name, str):
        return name.encode("utf-8")
    return bytes(name)


def equal_ascii_name(x: NameLike, y: NameLike) -> bool:
    """Compare two names, folding only ASCII letters to lower case."""
    a, b = _name_bytes(x), _name_bytes(y)
    if len(a) != len(b):
        return False
    return a.translate(_ASCII_FOLD) == b.translate(_ASCII_FOLD)


def check_response(req_id: int, question, response: dns.message.Message) -> bool:
    """Report whether ``response`` answers the query ``req_id`` for ``question``.

    ``question`` is a (name, rdtype, rdclass) triple.
    """
    if not response.flags & dns.flags.QR:
        return False
    if response.id != req_id:
        return False
    if not response.question:
        return False
    name, rdtype, rdclass = question
    answered = response.question[0]
    if dns.rdatatype.RdataType.make(rdtype) != answered.rdtype:
        return False
    if dns.rdataclass.RdataClass.make(rdclass) != answered.rdclass:
        return False
    return equal_ascii_name(name, answered.name)