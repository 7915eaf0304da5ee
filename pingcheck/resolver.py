"""Resolve command line hosts into ping targets."""

import logging
import socket
from dataclasses import dataclass, field
from ipaddress import ip_address
from typing import Iterable

from pingcheck.models import IPAddress, Target

logger = logging.getLogger(__name__)


def address_filter(family: int | None):
    """Return a predicate accepting addresses of the given IP version (None: all)."""
    if family is None:
        return lambda addr: True
    if family not in (4, 6):
        raise ValueError(f"unsupported address family: {family}")
    return lambda addr: addr.version == family


@dataclass
class Targets:
    """Resolved ping targets plus warnings for hosts that did not resolve.

    A host may contribute several targets (dual-stack names) or none.
    """

    targets: list[Target] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def addresses(self) -> list[IPAddress]:
        return [target.address for target in self.targets]

    @property
    def hosts(self) -> list[str]:
        return [target.host for target in self.targets]

    def add_host(self, host: str, family: int | None = None) -> None:
        """Resolve a single host and append the matching addresses."""
        accept = address_filter(family)
        try:
            infos = socket.getaddrinfo(host, 0, type=socket.SOCK_STREAM)
        except (OSError, UnicodeError) as e:
            logger.warning("Cannot resolve host: %s (%s)", host, e)
            self.warnings.append(f"{host}: {e}")
            return

        seen = set()
        for _family, _type, _proto, _canonname, sockaddr in infos:
            addr = ip_address(sockaddr[0])
            if addr in seen or not accept(addr):
                continue
            seen.add(addr)
            self.targets.append(Target(address=addr, host=host))

        logger.debug("Host resolved: %s -> %s", host, [str(a) for a in seen])


def build(hosts: Iterable[str], family: int | None = None) -> Targets:
    """Resolve all hosts, keeping going when one of them fails."""
    resolved = Targets()
    for host in hosts:
        resolved.add_host(host, family)
    return resolved
