"""
Trace configuration
"""

import os
from dataclasses import dataclass, field


DEFAULT_PROBES_PER_HOP = 3
DEFAULT_TIMEOUT = 2  # seconds
DEFAULT_BUFFER_SIZE = 500  # bytes per receive
MAX_TTL_LIMIT = 255


def default_identifier() -> int:
    """Session identifier shared by every probe of one process"""
    return os.getpid() & 0xFFFF


@dataclass
class TraceConfig:
    """
    Parameters of one trace run.

    max_ttl is exclusive: hops 1 .. max_ttl - 1 are probed.
    """
    max_ttl: int
    timeout: float = DEFAULT_TIMEOUT
    probes_per_hop: int = DEFAULT_PROBES_PER_HOP
    identifier: int = field(default_factory=default_identifier)
    payload: bytes = b''
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self):
        if not 1 <= self.max_ttl <= MAX_TTL_LIMIT:
            raise ValueError(
                f"max_ttl must be between 1 and {MAX_TTL_LIMIT}, got {self.max_ttl}"
            )
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.probes_per_hop < 1:
            raise ValueError(
                f"probes_per_hop must be at least 1, got {self.probes_per_hop}"
            )
        if not 0 <= self.identifier <= 0xFFFF:
            raise ValueError(
                f"identifier must fit in 16 bits, got {self.identifier}"
            )
