"""
Raw socket ICMP transport for Linux/macOS
"""

import logging
import socket
from typing import Optional

from ..errors import TransportError
from .base import Transport


log = logging.getLogger(__name__)


class RawSocketTransport(Transport):
    """
    ICMP transport over an AF_INET/SOCK_RAW socket.

    A single socket is opened per trace and reused for every probe;
    the kernel prepends the IPv4 header to every received datagram.
    """

    def __init__(self, bind_address: str = '0.0.0.0'):
        self.bind_address = bind_address
        self._sock: Optional[socket.socket] = None

    def open(self, timeout: float):
        """Create the raw socket, bind it and set the receive timeout"""
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
        except PermissionError:
            raise TransportError(
                "Root privileges required. Please run with sudo."
            )
        except OSError as e:
            raise TransportError(f"Cannot create raw ICMP socket: {e}")

        try:
            sock.bind((self.bind_address, 0))
            sock.settimeout(timeout)
        except OSError as e:
            sock.close()
            raise TransportError(f"Cannot configure raw ICMP socket: {e}")

        log.debug("raw ICMP socket bound to %s, timeout %ss", self.bind_address, timeout)
        self._sock = sock

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise OSError("transport is not open")
        return self._sock

    def set_ttl(self, ttl: int):
        self._socket().setsockopt(socket.IPPROTO_IP, socket.IP_TTL, ttl)

    def send(self, data: bytes, address: str):
        self._socket().sendto(data, (address, 0))

    def receive(self, buffer_size: int) -> tuple[bytes, str]:
        data, addr = self._socket().recvfrom(buffer_size)
        return data, addr[0]

    def close(self):
        """Close the socket"""
        if self._sock:
            try:
                self._sock.close()
            except OSError as e:
                log.debug("error closing raw socket: %s", e)
            self._sock = None
