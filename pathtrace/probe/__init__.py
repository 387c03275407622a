"""
Probe engine and transports for pathtrace
"""

from .base import Transport
from .raw_socket import RawSocketTransport
from .fake import FakeTransport
from .tracer import Tracer

__all__ = ['Transport', 'RawSocketTransport', 'FakeTransport', 'Tracer']
