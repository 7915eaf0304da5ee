"""Parallel ping of all targets with a barrier join."""

import logging
from typing import Callable, Iterable, Sequence

from PySide6.QtCore import QThreadPool

from pingcheck.models import IPAddress, Outcome, ProbeSetupError, SamplingError, Times
from pingcheck.prober import Prober
from pingcheck.workers import SamplerWorker

logger = logging.getLogger(__name__)


def measure(streams: Sequence[Iterable[Outcome]], cutoff: float) -> Times:
    """Collect the best ping time for each stream.

    Every stream gets its own worker. Sampling for a stream stops either when
    a reply beats ``cutoff`` or after ``MAX_ATTEMPTS`` attempts, independent of
    all other streams. Returns only after every worker has finished.

    Args:
        streams: One outcome stream per target, in target order
        cutoff: Early-stop latency in seconds

    Returns:
        Best latency per target (None where no reply arrived), same order

    Raises:
        SamplingError: if a stream raised instead of reporting no reply
    """
    if not streams:
        return []

    workers = [SamplerWorker(i, stream, cutoff) for i, stream in enumerate(streams)]

    # All targets run at once; the pool is private to this run
    thread_pool = QThreadPool()
    thread_pool.setMaxThreadCount(max(len(workers), thread_pool.maxThreadCount()))

    for worker in workers:
        thread_pool.start(worker)

    logger.debug("Sampling started: %d targets, cutoff=%.6fs", len(workers), cutoff)
    thread_pool.waitForDone()

    failed = [worker for worker in workers if worker.error is not None]
    if failed:
        raise SamplingError(f"probe stream for target #{failed[0].index} failed") from failed[0].error

    times = [worker.best for worker in workers]
    logger.debug(
        "Sampling finished: attempts=%s, times=%s",
        [worker.attempts for worker in workers],
        times,
    )
    return times


def ping_all(
    addresses: Iterable[IPAddress],
    cutoff: float,
    prober_factory: Callable[[], Prober],
) -> Times:
    """Set up one probe stream per address and ping them all in parallel.

    All streams are created before sampling starts, so a transport that cannot
    be set up aborts the run without sending a single probe.

    Raises:
        ProbeSetupError: if a probe transport cannot be created
    """
    addresses = list(addresses)
    if not addresses:
        return []

    try:
        streams = [prober_factory().stream(addr) for addr in addresses]
    except OSError as e:
        raise ProbeSetupError(
            "cannot create probe transport - missing privileges or ping command?"
        ) from e

    return measure(streams, cutoff)
