"""Fake probers for pingcheck testing and simulation."""

import random
from typing import Iterator, Mapping, Sequence

from pingcheck.models import IPAddress, Outcome


class FakeProber:
    """Generates fake probe outcomes without touching the network."""

    def __init__(self, seed: int | None = None):
        """Initialize with optional random seed for deterministic behavior."""
        self._random = random.Random(seed)

        # Simulation parameters, seconds
        self.base_latency = 0.025
        self.latency_variance = 0.005
        self.spike_probability = 0.05
        self.spike_multiplier = 3.0
        self.loss_probability = 0.02

    def stream(self, address: IPAddress) -> Iterator[Outcome]:
        while True:
            yield self.sample()

    def sample(self) -> Outcome:
        """Draw one outcome: a latency in seconds or None for loss."""
        if self._random.random() < self.loss_probability:
            return None

        latency = self.base_latency
        if self._random.random() < self.spike_probability:
            latency *= self.spike_multiplier
        latency += self._random.gauss(0, self.latency_variance)

        return round(max(0.0001, latency), 6)


class ScriptedProber:
    """Replays fixed outcome lists per address.

    script: mapping of address (or its string form) -> sequence of outcomes.
    Unknown addresses get an empty stream. ``fail_with`` simulates a transport
    that cannot be created.
    """

    def __init__(
        self,
        script: Mapping[object, Sequence[Outcome]] | None = None,
        fail_with: OSError | None = None,
    ):
        if fail_with is not None:
            raise fail_with
        self.script = {str(k): list(v) for k, v in (script or {}).items()}
        self.consumed: dict[str, int] = {}

    def stream(self, address: IPAddress) -> Iterator[Outcome]:
        key = str(address)
        self.consumed[key] = 0
        for outcome in self.script.get(key, []):
            self.consumed[key] += 1
            yield outcome
