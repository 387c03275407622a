import io
import struct
from types import SimpleNamespace

import pytest
from rich.console import Console

from pathtrace.output import ConsoleOutput


def ip_header(ihl_words: int = 5) -> bytes:
    """Minimal IPv4 header: version/IHL byte followed by zero padding"""
    return bytes([0x40 | ihl_words]) + bytes(ihl_words * 4 - 1)


def echo_reply(identifier: int = 42, sequence: int = 1, payload: bytes = b'',
               ihl_words: int = 5) -> bytes:
    return ip_header(ihl_words) + struct.pack('!BBHHH', 0, 0, 0, identifier, sequence) + payload


def time_exceeded(inner_ihl_words: int = 5,
                  original: bytes = b'\x08\x00\xf7\xd4\x00\x2a\x00\x01',
                  outer_ihl_words: int = 5) -> bytes:
    return (ip_header(outer_ihl_words)
            + struct.pack('!BBHI', 11, 0, 0, 0)
            + ip_header(inner_ihl_words)
            + original)


def dest_unreachable() -> bytes:
    return ip_header() + struct.pack('!BBHI', 3, 1, 0, 0) + ip_header() + bytes(8)


class StepClock:
    """Advances one millisecond per call"""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        self.now += 0.001
        return self.now


@pytest.fixture
def datagrams():
    return SimpleNamespace(
        ip_header=ip_header,
        echo_reply=echo_reply,
        time_exceeded=time_exceeded,
        dest_unreachable=dest_unreachable,
    )


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def buffer():
    return io.StringIO()


@pytest.fixture
def output(buffer):
    console = Console(file=buffer, width=200, highlight=False, color_system=None)
    return ConsoleOutput(console=console)
