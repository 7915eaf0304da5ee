"""Unit tests for target resolution."""

import socket
from ipaddress import ip_address

import pytest

from pingcheck import resolver
from pingcheck.models import Target


def addr(a):
    return ip_address(a)


def fake_getaddrinfo(table):
    """Build a getaddrinfo replacement answering from a host -> addresses table."""

    def getaddrinfo(host, port, family=0, type=0, proto=0, flags=0):
        if host not in table:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        infos = []
        for a in table[host]:
            if ":" in a:
                infos.append((socket.AF_INET6, type, 6, "", (a, port, 0, 0)))
            else:
                infos.append((socket.AF_INET, type, 6, "", (a, port)))
        return infos

    return getaddrinfo


@pytest.fixture
def dns(monkeypatch):
    table = {
        "dualstack.example": ["2001:db8::10", "192.0.2.10"],
        "v4.example": ["192.0.2.20", "192.0.2.20", "192.0.2.21"],
    }
    monkeypatch.setattr(socket, "getaddrinfo", fake_getaddrinfo(table))
    return table


class TestLiterals:
    """Numeric targets resolve without DNS."""

    def test_ip4_literal(self):
        assert resolver.build(["8.8.8.8"]).addresses == [addr("8.8.8.8")]

    def test_ip6_literal(self):
        assert resolver.build(["2620:fe::fe"]).addresses == [addr("2620:fe::fe")]

    def test_localhost_ipv4(self):
        assert resolver.build(["localhost"], 4).addresses == [addr("127.0.0.1")]


class TestBuild:
    """Test resolution with a fake resolver."""

    def test_dualstack_keeps_resolver_order(self, dns):
        result = resolver.build(["dualstack.example"])

        assert result.targets == [
            Target(addr("2001:db8::10"), "dualstack.example"),
            Target(addr("192.0.2.10"), "dualstack.example"),
        ]
        assert result.warnings == []

    def test_ipv4_filter(self, dns):
        assert resolver.build(["dualstack.example"], 4).addresses == [addr("192.0.2.10")]

    def test_ipv6_filter(self, dns):
        assert resolver.build(["dualstack.example"], 6).addresses == [addr("2001:db8::10")]

    def test_duplicates_collapsed_per_host(self, dns):
        result = resolver.build(["v4.example"])
        assert result.addresses == [addr("192.0.2.20"), addr("192.0.2.21")]

    def test_repeated_host_not_collapsed(self, dns):
        result = resolver.build(["v4.example", "v4.example"])
        assert len(result.targets) == 4

    def test_resolve_error_is_warning(self, dns):
        result = resolver.build(["no.such.host.example.com", "v4.example"])

        assert result.hosts == ["v4.example", "v4.example"]
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("no.such.host.example.com: ")
        assert "Name or service not known" in result.warnings[0]

    def test_all_hosts_fail(self, dns):
        result = resolver.build(["a.invalid", "b.invalid"])

        assert result.targets == []
        assert [w.split(":")[0] for w in result.warnings] == ["a.invalid", "b.invalid"]

    def test_filter_leaves_nothing_without_warning(self, dns):
        result = resolver.build(["v4.example"], 6)
        assert result.targets == []
        assert result.warnings == []

    def test_invalid_family(self):
        with pytest.raises(ValueError, match="unsupported address family"):
            resolver.address_filter(5)
