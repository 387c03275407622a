"""
Traceroute orchestrator
"""

import logging
import time
from typing import Callable, Optional

from ..checksum import verify_checksum
from ..config import TraceConfig
from ..enrichment import NameResolver, SystemResolver
from ..errors import ParseError
from ..models import HopResult, IntermediateHop, ProbeResult, Reply, Timeout, TraceState
from ..output import ConsoleOutput
from ..packet import (
    EchoReply, build_echo_request, decode, encode, ip_header_length, with_checksum
)
from .base import Transport
from .raw_socket import RawSocketTransport


log = logging.getLogger(__name__)


class Tracer:
    """
    Traceroute orchestrator.

    Sweeps TTL from 1 up to (excluding) config.max_ttl, sending
    config.probes_per_hop echo requests per hop, one at a time, and
    stops after the hop at which the destination sends an echo reply.
    """

    def __init__(
        self,
        destination: str,
        config: TraceConfig,
        transport: Optional[Transport] = None,
        resolver: Optional[NameResolver] = None,
        output: Optional[ConsoleOutput] = None,
        clock: Callable[[], float] = time.perf_counter
    ):
        self.destination = destination
        self.config = config
        self.transport = transport or RawSocketTransport()
        self.resolver = resolver or SystemResolver()
        self.output = output or ConsoleOutput()
        self.clock = clock
        self.target_ip: Optional[str] = None

    def resolve_target(self) -> str:
        """
        Resolve the destination to an IPv4 address.

        Raises:
            BadAddress: destination cannot be resolved
        """
        self.target_ip = self.resolver.resolve_address(self.destination)
        return self.target_ip

    def trace(
        self,
        on_hop: Optional[Callable[[HopResult], None]] = None
    ) -> list[HopResult]:
        """
        Execute traceroute.

        Args:
            on_hop: Optional callback invoked after each completed hop

        Returns:
            List of HopResult, one per probed TTL

        Raises:
            BadAddress: destination cannot be resolved
            TransportError: the transport cannot be opened
        """
        if not self.target_ip:
            self.resolve_target()

        self.output.print_header(self.target_ip, self.resolver.reverse(self.target_ip))

        hops: list[HopResult] = []
        state = TraceState()

        self.transport.open(self.config.timeout)
        with self.transport:
            for ttl in range(1, self.config.max_ttl):
                state.start_hop(ttl)
                hop = HopResult(hop=ttl)
                self.output.start_hop(ttl)

                for _ in range(self.config.probes_per_hop):
                    result = self._probe(state)
                    hop.probes.append(result)
                    self._report(state, result)

                self.output.end_hop()
                hops.append(hop)
                log.debug("hop %d: %d/%d probes answered", ttl, state.received, state.sent)

                if on_hop:
                    on_hop(hop)

                if state.reached:
                    log.debug("destination %s reached at hop %d", self.target_ip, ttl)
                    break

        return hops

    def _probe(self, state: TraceState) -> ProbeResult:
        """Send one echo request at the current TTL and wait for one answer"""
        sequence = state.next_sequence()
        packet = with_checksum(
            build_echo_request(self.config.identifier, sequence, self.config.payload)
        )
        data = encode(packet)
        state.sent += 1

        try:
            self.transport.set_ttl(state.ttl)
            send_time = self.clock()
            self.transport.send(data, self.target_ip)
            datagram, sender = self.transport.receive(self.config.buffer_size)
        except OSError as e:
            log.debug("ttl %d seq %d: no answer (%s)", state.ttl, sequence, e)
            return Timeout()

        rtt_ms = (self.clock() - send_time) * 1000

        try:
            response = decode(datagram)
        except ParseError as e:
            log.debug("ttl %d seq %d: discarded datagram from %s: %s",
                      state.ttl, sequence, sender, e)
            return Timeout(discarded=True)

        if not verify_checksum(datagram[ip_header_length(datagram):]):
            log.debug("ttl %d seq %d: bad checksum 0x%04x from %s",
                      state.ttl, sequence, response.checksum, sender)

        state.received += 1

        if isinstance(response.message, EchoReply):
            state.reached = True
            return Reply(responder_ip=sender, rtt_ms=rtt_ms)

        return IntermediateHop(responder_ip=sender, rtt_ms=rtt_ms)

    def _report(self, state: TraceState, result: ProbeResult):
        """Print one probe, naming the responder only when it changed"""
        if isinstance(result, Timeout):
            if not result.discarded:
                self.output.print_timeout()
            return

        if result.responder_ip != state.last_responder:
            hostname = self.resolver.reverse(result.responder_ip)
            self.output.print_probe(result.rtt_ms, result.responder_ip, hostname)
        else:
            self.output.print_probe(result.rtt_ms)

        state.last_responder = result.responder_ip
