"""
Name resolution: destination lookup and reverse (PTR) lookups
"""

import logging
import socket
from abc import ABC, abstractmethod
from typing import Optional

import dns.exception
import dns.resolver
import dns.reversename

from ..errors import BadAddress


log = logging.getLogger(__name__)


class NameResolver(ABC):
    """
    Resolver used by the Tracer.

    resolve_address() is mandatory for the destination and raises
    BadAddress. reverse() is best-effort and returns None on any failure.
    """

    def resolve_address(self, target: str) -> str:
        """
        Resolve a hostname or IPv4 literal to an IPv4 address.

        Raises:
            BadAddress: no IPv4 address found
        """
        try:
            infos = socket.getaddrinfo(target, None, socket.AF_INET)
        except (socket.gaierror, UnicodeError) as e:
            raise BadAddress(f"Cannot resolve hostname '{target}': {e}")

        for _family, _type, _proto, _canon, sockaddr in infos:
            return sockaddr[0]

        raise BadAddress(f"Cannot resolve hostname '{target}'")

    @abstractmethod
    def reverse(self, ip: str) -> Optional[str]:
        """
        Reverse lookup for a single IP.

        Returns:
            Hostname or None if not found
        """
        pass


class SystemResolver(NameResolver):
    """PTR lookups through the system resolver (hosts file, nsswitch)"""

    def reverse(self, ip: str) -> Optional[str]:
        if not ip:
            return None
        try:
            hostname, _, _ = socket.gethostbyaddr(ip)
            return hostname
        except (socket.herror, socket.gaierror, socket.timeout, OSError) as e:
            log.debug("no PTR for %s: %s", ip, e)
            return None


class DnsResolver(NameResolver):
    """
    PTR lookups sent straight to the configured DNS servers.

    Bypasses the hosts file; the timeout bounds each lookup.
    """

    def __init__(self, timeout: float = 2.0):
        self.timeout = timeout
        self._resolver: Optional[dns.resolver.Resolver] = None

    def _get_resolver(self) -> dns.resolver.Resolver:
        """Read resolv.conf on first use"""
        if self._resolver is None:
            self._resolver = dns.resolver.Resolver()
            self._resolver.timeout = self.timeout
            self._resolver.lifetime = self.timeout
        return self._resolver

    def reverse(self, ip: str) -> Optional[str]:
        if not ip:
            return None
        try:
            name = dns.reversename.from_address(ip)
            answers = self._get_resolver().resolve(name, 'PTR')
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer,
                dns.resolver.NoNameservers, dns.exception.Timeout) as e:
            log.debug("no PTR for %s: %s", ip, e)
            return None
        except (dns.exception.DNSException, ValueError) as e:
            log.debug("PTR lookup for %s failed: %s", ip, e)
            return None

        for rdata in answers:
            return rdata.target.to_text(omit_final_dot=True)
        return None


class NullResolver(NameResolver):
    """Skips reverse lookups"""

    def reverse(self, ip: str) -> Optional[str]:
        return None


class StaticResolver(NameResolver):
    """
    Table-driven resolver.

    hosts: name -> IPv4 address, names: IPv4 address -> hostname.
    Unknown destinations raise BadAddress, unknown addresses have no name.
    """

    def __init__(self, hosts: Optional[dict[str, str]] = None,
                 names: Optional[dict[str, str]] = None):
        self.hosts = hosts or {}
        self.names = names or {}
        self.lookups: list[str] = []

    def resolve_address(self, target: str) -> str:
        if target in self.hosts:
            return self.hosts[target]
        if target in self.hosts.values():
            return target
        raise BadAddress(f"Cannot resolve hostname '{target}'")

    def reverse(self, ip: str) -> Optional[str]:
        self.lookups.append(ip)
        return self.names.get(ip)
