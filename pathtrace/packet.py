"""
ICMPv4 packet codec

Encodes outbound echo requests and decodes the datagrams delivered by a
raw ICMP socket, which always start with the IPv4 header.
"""

import struct
from dataclasses import dataclass, replace
from typing import Union

from .checksum import calc_checksum
from .errors import InternalError, ParseError


ICMP_ECHO_REPLY = 0
ICMP_ECHO_REQUEST = 8
ICMP_TIME_EXCEEDED = 11

ICMP_HEADER_LEN = 8
ORIGINAL_DATAGRAM_LEN = 8

HEADER_FORMAT = '!BBHHH'


@dataclass(frozen=True)
class EchoRequest:
    """Outbound echo request"""
    identifier: int
    sequence: int
    payload: bytes = b''


@dataclass(frozen=True)
class EchoReply:
    """Echo reply - the destination answered"""
    identifier: int
    sequence: int
    payload: bytes = b''


@dataclass(frozen=True)
class TimeExceeded:
    """Time exceeded - a router dropped the probe at TTL zero"""
    embedded_ip_header: bytes
    embedded_original_8_bytes: bytes


IcmpMessage = Union[EchoRequest, EchoReply, TimeExceeded]


@dataclass(frozen=True)
class IcmpPacket:
    """ICMP header fields plus the typed message body"""
    icmp_type: int
    code: int
    checksum: int
    message: IcmpMessage


def ip_header_length(data: bytes) -> int:
    """IPv4 header length in bytes, from the IHL nibble"""
    return (data[0] & 0x0F) * 4


def build_echo_request(identifier: int, sequence: int,
                       payload: bytes = b'') -> IcmpPacket:
    """Build an echo request with the checksum still zeroed"""
    return IcmpPacket(
        icmp_type=ICMP_ECHO_REQUEST,
        code=0,
        checksum=0,
        message=EchoRequest(
            identifier=identifier & 0xFFFF,
            sequence=sequence & 0xFFFF,
            payload=payload
        )
    )


def with_checksum(packet: IcmpPacket) -> IcmpPacket:
    """Return a copy of the packet carrying its real checksum"""
    zeroed = replace(packet, checksum=0)
    return replace(packet, checksum=calc_checksum(encode(zeroed)))


def encode(packet: IcmpPacket) -> bytes:
    """
    Serialize an echo request.

    The checksum field is written as given; use with_checksum() first
    for a packet that is ready to send.

    Raises:
        InternalError: message is not an EchoRequest
    """
    message = packet.message
    if not isinstance(message, EchoRequest):
        raise InternalError(
            f"unsupported encode: {type(message).__name__}"
        )

    header = struct.pack(
        HEADER_FORMAT,
        packet.icmp_type,
        packet.code,
        packet.checksum,
        message.identifier,
        message.sequence
    )
    return header + message.payload


def decode(data: bytes) -> IcmpPacket:
    """
    Parse a raw-socket datagram (IPv4 header + ICMP message).

    Only echo replies and time exceeded messages are recognized.

    Raises:
        ParseError: datagram is truncated or of another ICMP type
    """
    if not data:
        raise ParseError("empty datagram")

    ihl = ip_header_length(data)
    if len(data) < ihl + ICMP_HEADER_LEN:
        raise ParseError(
            f"datagram too short: {len(data)} bytes, need {ihl + ICMP_HEADER_LEN}"
        )

    icmp = data[ihl:]
    icmp_type, code, checksum = struct.unpack('!BBH', icmp[:4])

    if icmp_type == ICMP_ECHO_REPLY:
        identifier, sequence = struct.unpack('!HH', icmp[4:8])
        message = EchoReply(
            identifier=identifier,
            sequence=sequence,
            payload=bytes(icmp[ICMP_HEADER_LEN:])
        )

    elif icmp_type == ICMP_TIME_EXCEEDED:
        message = _decode_time_exceeded(icmp)

    else:
        raise ParseError(f"unsupported ICMP type {icmp_type}")

    return IcmpPacket(
        icmp_type=icmp_type,
        code=code,
        checksum=checksum,
        message=message
    )


def _decode_time_exceeded(icmp: bytes) -> TimeExceeded:
    """Split out the embedded IP header and first 8 original bytes"""
    inner_start = ICMP_HEADER_LEN
    if len(icmp) <= inner_start:
        raise ParseError("time exceeded without embedded datagram")

    inner_end = inner_start + ip_header_length(icmp[inner_start:])
    original_end = inner_end + ORIGINAL_DATAGRAM_LEN

    if len(icmp) < original_end:
        raise ParseError(
            f"time exceeded truncated: {len(icmp)} bytes, need {original_end}"
        )

    return TimeExceeded(
        embedded_ip_header=bytes(icmp[inner_start:inner_end]),
        embedded_original_8_bytes=bytes(icmp[inner_end:original_end])
    )
