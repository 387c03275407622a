"""
Data models for pathtrace
"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class Reply:
    """Echo reply from the destination"""
    responder_ip: str
    rtt_ms: float


@dataclass(frozen=True)
class IntermediateHop:
    """Time exceeded from a router on the path"""
    responder_ip: str
    rtt_ms: float


@dataclass(frozen=True)
class Timeout:
    """
    Probe with no usable answer.

    discarded is set when a datagram did arrive but could not be decoded
    as an echo reply or time exceeded message.
    """
    discarded: bool = False


ProbeResult = Union[Reply, IntermediateHop, Timeout]


@dataclass
class HopResult:
    """Result of probing a single hop (multiple probes)"""
    hop: int
    probes: list[ProbeResult] = field(default_factory=list)

    @property
    def ip(self) -> Optional[str]:
        """Last responder seen at this hop"""
        for probe in reversed(self.probes):
            if not isinstance(probe, Timeout):
                return probe.responder_ip
        return None

    @property
    def reached_target(self) -> bool:
        return any(isinstance(p, Reply) for p in self.probes)


@dataclass
class TraceState:
    """Mutable per-trace bookkeeping, owned by one Tracer.trace() call"""
    ttl: int = 0
    sequence: int = 0
    sent: int = 0
    received: int = 0
    reached: bool = False
    last_responder: Optional[str] = None

    def start_hop(self, ttl: int):
        self.ttl = ttl
        self.sent = 0
        self.received = 0
        self.last_responder = None

    def next_sequence(self) -> int:
        self.sequence = (self.sequence + 1) & 0xFFFF
        return self.sequence
