"""Data models for pingcheck measurements."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from ipaddress import IPv4Address, IPv6Address
from typing import Union

IPAddress = Union[IPv4Address, IPv6Address]

# One probe attempt: latency in seconds, or None for "no reply"
Outcome = Union[float, None]

# Best latency per target, in target order
Times = list[Union[float, None]]


class ProbeSetupError(Exception):
    """The probe transport could not be created. Fatal for the whole run."""


class SamplingError(Exception):
    """A probe stream raised instead of reporting "no reply"."""


@dataclass(frozen=True)
class Target:
    """A resolved ping target.

    ``host`` keeps the command line string the address was resolved from, so
    output can show ``host/address`` for names and just the address for
    numeric targets.
    """

    address: IPAddress
    host: str


class Severity(IntEnum):
    """Check result. Values double as plugin exit codes."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    def __str__(self) -> str:
        return self.name


class Condition(Enum):
    """What the classification was based on."""

    NO_TARGETS = "no targets"
    NO_DATA = "no data"
    MEASURED = "measured"


@dataclass(frozen=True)
class Classification:
    """Severity plus the winning latency and its position in the result set."""

    severity: Severity
    condition: Condition
    best: float | None = None
    index: int | None = None
