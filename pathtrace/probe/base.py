"""
Abstract base class for ICMP transports
"""

from abc import ABC, abstractmethod


class Transport(ABC):
    """
    Raw ICMP transport used by the Tracer.

    open() failures are fatal to a trace and raise TransportError.
    set_ttl(), send() and receive() raise OSError; the Tracer treats
    those as a lost probe.
    """

    @abstractmethod
    def open(self, timeout: float):
        """
        Create and bind the socket.

        Args:
            timeout: Receive timeout in seconds, applied to every receive()
        """
        pass

    @abstractmethod
    def set_ttl(self, ttl: int):
        """Set the TTL of subsequent outbound datagrams"""
        pass

    @abstractmethod
    def send(self, data: bytes, address: str):
        """Send an ICMP message to an IPv4 address"""
        pass

    @abstractmethod
    def receive(self, buffer_size: int) -> tuple[bytes, str]:
        """
        Wait for one datagram.

        Returns:
            (datagram starting with its IPv4 header, sender address)

        Raises:
            TimeoutError: nothing arrived within the timeout
        """
        pass

    @abstractmethod
    def close(self):
        """Clean up resources"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
