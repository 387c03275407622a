"""
Error types for pathtrace
"""


class TracerError(Exception):
    """Base class for all pathtrace errors"""

    default_message = "Trace failed"

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class BadAddress(TracerError):
    """Destination could not be resolved to an IPv4 address"""

    default_message = "Could not convert to IP address"


class ParseError(TracerError):
    """Inbound datagram is not a recognized ICMP message"""

    default_message = "Could not parse the incoming packet"


class InternalError(TracerError):
    """Codec used outside its contract (e.g. encoding a reply)"""

    default_message = "Internal error"


class TransportError(TracerError):
    """Raw socket could not be created or configured"""

    default_message = "Could not set up the ICMP transport"
