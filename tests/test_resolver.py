# tests/test_resolver.py
import socket
from types import SimpleNamespace

import dns.exception
import dns.name
import dns.resolver
import pytest

from pathtrace.enrichment import DnsResolver, NullResolver, StaticResolver, SystemResolver
from pathtrace.enrichment import resolver as resolver_module
from pathtrace.errors import BadAddress


def test_resolve_ipv4_literal():
    assert SystemResolver().resolve_address("127.0.0.1") == "127.0.0.1"


def test_resolve_failure_is_bad_address(monkeypatch):
    def fail(*args, **kwargs):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr(resolver_module.socket, "getaddrinfo", fail)

    with pytest.raises(BadAddress, match="no.such.host"):
        SystemResolver().resolve_address("no.such.host")


def test_resolve_without_ipv4_results(monkeypatch):
    monkeypatch.setattr(resolver_module.socket, "getaddrinfo", lambda *a, **kw: [])
    with pytest.raises(BadAddress):
        SystemResolver().resolve_address("v6only.example")


def test_resolve_takes_first_address(monkeypatch):
    infos = [
        (socket.AF_INET, socket.SOCK_RAW, 0, '', ("192.0.2.1", 0)),
        (socket.AF_INET, socket.SOCK_RAW, 0, '', ("192.0.2.2", 0)),
    ]
    monkeypatch.setattr(resolver_module.socket, "getaddrinfo", lambda *a, **kw: infos)
    assert SystemResolver().resolve_address("example.com") == "192.0.2.1"


def test_system_reverse(monkeypatch):
    monkeypatch.setattr(resolver_module.socket, "gethostbyaddr",
                        lambda ip: ("router.example.net", [], [ip]))
    assert SystemResolver().reverse("192.0.2.1") == "router.example.net"


def test_system_reverse_failure_is_none(monkeypatch):
    def fail(ip):
        raise socket.herror(1, "Unknown host")

    monkeypatch.setattr(resolver_module.socket, "gethostbyaddr", fail)
    assert SystemResolver().reverse("192.0.2.1") is None


class FakeDns:
    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.queries = []

    def resolve(self, name, rdtype):
        self.queries.append((name.to_text(), rdtype))
        if self.error:
            raise self.error
        return self.answer


def test_dns_reverse():
    fake = FakeDns(answer=[SimpleNamespace(target=dns.name.from_text("router.example.net."))])
    resolver = DnsResolver(timeout=1.0)
    resolver._resolver = fake

    assert resolver.reverse("192.0.2.1") == "router.example.net"
    assert fake.queries == [("1.2.0.192.in-addr.arpa.", "PTR")]


@pytest.mark.parametrize("error", [
    dns.resolver.NXDOMAIN(),
    dns.resolver.NoAnswer(),
    dns.exception.Timeout(),
])
def test_dns_reverse_failure_is_none(error):
    resolver = DnsResolver(timeout=1.0)
    resolver._resolver = FakeDns(error=error)
    assert resolver.reverse("192.0.2.1") is None


def test_dns_reverse_rejects_garbage():
    resolver = DnsResolver(timeout=1.0)
    resolver._resolver = FakeDns(answer=[])
    assert resolver.reverse("not-an-ip") is None
    assert resolver.reverse("") is None


def test_null_resolver():
    assert NullResolver().reverse("192.0.2.1") is None


def test_static_resolver():
    resolver = StaticResolver(hosts={"example.com": "192.0.2.1"}, names={"192.0.2.1": "example.com"})
    assert resolver.resolve_address("example.com") == "192.0.2.1"
    assert resolver.resolve_address("192.0.2.1") == "192.0.2.1"
    assert resolver.reverse("192.0.2.1") == "example.com"
    assert resolver.reverse("192.0.2.2") is None
    with pytest.raises(BadAddress):
        resolver.resolve_address("other.example")
