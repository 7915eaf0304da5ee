"""Command line boundary: arguments in, plugin line and exit code out."""

import argparse
import logging
import sys
from typing import Callable, Sequence

from pingcheck import __version__
from pingcheck.aggregator import ping_all
from pingcheck.classifier import classify
from pingcheck.config import Settings
from pingcheck.fake_prober import FakeProber
from pingcheck.logging_config import configure_logging
from pingcheck.models import ProbeSetupError, SamplingError, Severity
from pingcheck.output import render
from pingcheck.prober import Prober
from pingcheck.prober_ping import PingProber
from pingcheck import resolver

logger = logging.getLogger(__name__)

PROG = "pingcheck"

# Exit code for runs that could not be carried out at all. Shares the value of
# UNKNOWN for plugin compatibility; the message goes to stderr instead.
EXIT_ERROR = int(Severity.UNKNOWN)


class PluginArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with the plugin error code on bad usage."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_ERROR, f"{self.prog}: error: {message}\n")


def build_argparser() -> argparse.ArgumentParser:
    ap = PluginArgumentParser(
        prog=PROG,
        description="Pings several hosts at once to test outside connectivity",
    )
    ap.add_argument("-w", "--warning", dest="warn_ms", type=float, default=50.0, metavar="MS",
                    help="WARN if no target's rtt is below (default: %(default)s)")
    ap.add_argument("-c", "--critical", dest="crit_ms", type=float, default=500.0, metavar="MS",
                    help="CRIT if no target's rtt is below (default: %(default)s)")
    family = ap.add_mutually_exclusive_group()
    family.add_argument("-4", "--ipv4", dest="family", action="store_const", const=4,
                        help="Ping only IPv4 addresses")
    family.add_argument("-6", "--ipv6", dest="family", action="store_const", const=6,
                        help="Ping only IPv6 addresses")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("targets", nargs="+", metavar="TARGET",
                    help="Ping targets (hostname or IP address)")
    return ap


def prober_factory_from(settings: Settings) -> Callable[[], Prober]:
    """Pick the probe transport configured in the environment."""
    if settings.prober == "fake":
        logger.info("Using FakeProber (PINGCHECK_PROBER=fake)")
        return lambda: FakeProber(seed=settings.fake_seed)
    return lambda: PingProber(timeout_ms=settings.timeout_ms, interval_ms=settings.interval_ms)


def describe(err: BaseException) -> str:
    """Render an exception followed by its chain of causes."""
    parts = [str(err) or type(err).__name__]
    cause = err.__cause__
    while cause is not None:
        parts.append(str(cause) or type(cause).__name__)
        cause = cause.__cause__
    return ": ".join(parts)


def run(argv: Sequence[str] | None = None, prober_factory: Callable[[], Prober] | None = None) -> int:
    """Run the check and print the plugin line. Returns the exit code."""
    ap = build_argparser()
    args = ap.parse_args(argv)

    if not 0 <= args.warn_ms <= args.crit_ms:
        ap.error("thresholds must satisfy 0 <= warning <= critical")
    warn = args.warn_ms / 1000
    crit = args.crit_ms / 1000

    try:
        if prober_factory is None:
            prober_factory = prober_factory_from(Settings.from_env())
        targets = resolver.build(args.targets, args.family)
        # Cutoff is the warning threshold
        times = ping_all(targets.addresses, warn, prober_factory)
        # Raises ValueError for negative latencies from a broken prober
        classification = classify(times, warn, crit)
    except (ValueError, ProbeSetupError, SamplingError) as e:
        logger.debug("Check could not run", exc_info=True)
        print(f"{PROG}: error: {describe(e)}", file=sys.stderr)
        return EXIT_ERROR

    output = render(targets.targets, times, classification, warn, crit, targets.warnings)
    print(f"{PROG}: {classification.severity} - {output}")
    return int(classification.severity)


def main():
    """Main entry point for the pingcheck command."""
    configure_logging()
    sys.exit(run())
