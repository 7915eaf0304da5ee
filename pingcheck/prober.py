"""Prober abstraction for pingcheck probe transports."""

from typing import Iterator, Protocol

from pingcheck.models import IPAddress, Outcome


class Prober(Protocol):
    """Protocol defining the interface for probe transports.

    Implementations must fail in ``__init__`` (or in ``stream`` before
    returning) when the transport cannot be set up. Once a stream exists,
    every failed attempt is reported as ``None``.
    """

    def stream(self, address: IPAddress) -> Iterator[Outcome]:
        """Return a lazy, possibly endless sequence of outcomes for address."""
        ...
