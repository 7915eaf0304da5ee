"""Environment based settings for pingcheck."""

import os
from dataclasses import dataclass
from typing import Mapping

PROBERS = ("ping", "fake")


def _int_var(environ: Mapping[str, str], name: str, default: int | None) -> int | None:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    prober: str = "ping"
    timeout_ms: int = 1000
    interval_ms: int = 0
    fake_seed: int | None = None

    def __post_init__(self):
        if self.prober not in PROBERS:
            raise ValueError(f"PINGCHECK_PROBER must be one of {', '.join(PROBERS)}, got {self.prober!r}")
        if self.timeout_ms <= 0:
            raise ValueError("PINGCHECK_TIMEOUT_MS must be positive")
        if self.interval_ms < 0:
            raise ValueError("PINGCHECK_INTERVAL_MS must not be negative")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Read settings from PINGCHECK_* environment variables."""
        if environ is None:
            environ = os.environ
        return cls(
            prober=environ.get("PINGCHECK_PROBER", "ping").strip().lower() or "ping",
            timeout_ms=_int_var(environ, "PINGCHECK_TIMEOUT_MS", 1000),
            interval_ms=_int_var(environ, "PINGCHECK_INTERVAL_MS", 0),
            fake_seed=_int_var(environ, "PINGCHECK_FAKE_SEED", None),
        )
