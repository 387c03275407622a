"""
Scripted transport for running traces without raw sockets
"""

from collections import deque
from typing import Optional, Union

from ..errors import TransportError
from .base import Transport


# A scripted answer: a (datagram, sender) pair, an exception to raise
# from receive(), or None for a timeout.
Answer = Union[tuple[bytes, str], BaseException, None]


class FakeTransport(Transport):
    """
    script: dict[ttl] -> list of answers, consumed one per probe at that TTL.
    If no scripted answer is left, receive() times out.

    fail_ttl and fail_send map a TTL to the exception raised by set_ttl()
    or send() for every probe at that TTL.

    Every send is recorded in `sent` as (ttl, data, address).
    """

    def __init__(self, script: Optional[dict[int, list[Answer]]] = None,
                 fail_open: Optional[str] = None,
                 fail_ttl: Optional[dict[int, BaseException]] = None,
                 fail_send: Optional[dict[int, BaseException]] = None):
        self.script: dict[int, deque] = {}
        if script:
            for ttl, answers in script.items():
                self.script[ttl] = deque(answers)
        self.fail_open = fail_open
        self.fail_ttl = fail_ttl or {}
        self.fail_send = fail_send or {}
        self.sent: list[tuple[int, bytes, str]] = []
        self.timeout: Optional[float] = None
        self.opened = False
        self.closed = False
        self._ttl = 0

    def open(self, timeout: float):
        if self.fail_open:
            raise TransportError(self.fail_open)
        self.timeout = timeout
        self.opened = True

    def set_ttl(self, ttl: int):
        if ttl in self.fail_ttl:
            raise self.fail_ttl[ttl]
        self._ttl = ttl

    def send(self, data: bytes, address: str):
        if self._ttl in self.fail_send:
            raise self.fail_send[self._ttl]
        self.sent.append((self._ttl, data, address))

    def receive(self, buffer_size: int) -> tuple[bytes, str]:
        answers = self.script.get(self._ttl)
        answer = answers.popleft() if answers else None

        if answer is None:
            raise TimeoutError("timed out")
        if isinstance(answer, BaseException):
            raise answer

        data, sender = answer
        return data[:buffer_size], sender

    def close(self):
        self.closed = True

    @property
    def ttls_sent(self) -> list[int]:
        return [ttl for ttl, _, _ in self.sent]
