"""ICMP prober for pingcheck using the system ping command."""

import logging
import platform
import re
import shutil
import subprocess
import time
from math import ceil
from typing import Iterator

from pingcheck.models import IPAddress, Outcome

logger = logging.getLogger(__name__)

_LESS_THAN_PATTERN = re.compile(r"time<(\d+)", re.IGNORECASE)
_LATENCY_PATTERN = re.compile(r"time\s*[=<]\s*(\d+(?:\.\d+)?)\s*ms", re.IGNORECASE)


def parse_ping_latency_ms(output: str) -> float | None:
    """Parse latency value from ping command output (pure function).

    Handles various ping output formats across platforms:
    - Linux/macOS: "time=12.3 ms"
    - Windows: "time=12ms" or "time<1ms"

    Windows "time<Nms" is interpreted as N/2 ms (midpoint estimate).

    Args:
        output: Raw ping command output

    Returns:
        Latency in milliseconds (float), or None if parsing failed

    Examples:
        >>> parse_ping_latency_ms("time=12.3 ms")
        12.3
        >>> parse_ping_latency_ms("time<1ms")
        0.5
        >>> parse_ping_latency_ms("Request timed out.") is None
        True
    """
    if not output:
        return None

    match = _LESS_THAN_PATTERN.search(output)
    if match:
        return float(match.group(1)) / 2.0

    match = _LATENCY_PATTERN.search(output)
    if match:
        return float(match.group(1))

    return None


class PingProber:
    """Prober that runs one OS ping per attempt.

    Cross-platform: Windows, Linux and macOS. Parsing relies on the English
    keyword "time" in ping output; localized output is reported as no reply.
    """

    def __init__(self, timeout_ms: int = 1000, interval_ms: int = 0, ping_command: str = "ping"):
        """Initialize the prober and check that ping is available.

        Args:
            timeout_ms: Maximum time to wait for each reply in milliseconds.
            interval_ms: Pause between consecutive sends to the same target.
            ping_command: Name or path of the ping executable.

        Raises:
            ValueError: on non-positive timeout or negative interval.
            FileNotFoundError: if the ping command cannot be found.
        """
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        if interval_ms < 0:
            raise ValueError("interval_ms must not be negative")

        self.timeout_ms = timeout_ms
        self.timeout_seconds = timeout_ms / 1000.0
        self.interval_seconds = interval_ms / 1000.0
        self.ping_command = ping_command
        self.system = platform.system()

        if shutil.which(ping_command) is None:
            raise FileNotFoundError(f"ping command not found: {ping_command}")

        logger.debug(
            "PingProber initialized: timeout_ms=%d, interval_ms=%d, system=%s",
            timeout_ms,
            interval_ms,
            self.system,
        )

    def stream(self, address: IPAddress) -> Iterator[Outcome]:
        """Return an endless stream of outcomes (seconds or None) for address."""
        cmd = self._build_ping_command(address)
        return self._outcomes(address, cmd)

    def _outcomes(self, address: IPAddress, cmd: list[str]) -> Iterator[Outcome]:
        first = True
        while True:
            if not first and self.interval_seconds:
                time.sleep(self.interval_seconds)
            first = False
            yield self.probe_once(address, cmd)

    def probe_once(self, address: IPAddress, cmd: list[str]) -> Outcome:
        """Send exactly one echo request and return its latency in seconds."""
        try:
            logger.debug("Executing ping: address=%s, timeout=%.1fs", address, self.timeout_seconds)

            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds + 0.5,
                shell=False,
            )

            if result.returncode != 0:
                logger.debug(
                    "Ping failed (non-zero returncode): address=%s, returncode=%d",
                    address,
                    result.returncode,
                )
                return None

            latency_ms = parse_ping_latency_ms(result.stdout)
            if latency_ms is None:
                logger.debug(
                    "Parse failed: address=%s, output_preview=%s",
                    address,
                    result.stdout[:100] if result.stdout else "(empty)",
                )
                return None

            logger.debug("Parsed latency: address=%s, latency=%.3fms", address, latency_ms)
            return latency_ms / 1000.0

        except subprocess.TimeoutExpired:
            logger.debug("Ping timeout: address=%s, timeout=%.1fs", address, self.timeout_seconds)
            return None
        except OSError as e:
            # A failed attempt is a missing reply, never a stream error
            logger.warning("Ping error: address=%s, error=%s", address, e, exc_info=True)
            return None

    def _build_ping_command(self, address: IPAddress) -> list[str]:
        """Build platform-specific ping command for a single echo request."""
        target = str(address)
        ipv6 = address.version == 6

        if self.system == "Windows":
            cmd = [self.ping_command, "-n", "1", "-w", str(self.timeout_ms)]
            if ipv6:
                cmd.append("-6")
            return cmd + [target]

        elif self.system == "Linux":
            timeout_secs = max(1, ceil(self.timeout_seconds))
            cmd = [self.ping_command, "-n", "-c", "1", "-W", str(timeout_secs)]
            if ipv6:
                cmd.append("-6")
            return cmd + [target]

        else:
            # macOS/BSD: -W has different semantics, rely on subprocess timeout
            command = self.ping_command
            if ipv6 and command == "ping":
                command = "ping6"
            return [command, "-n", "-c", "1", target]
