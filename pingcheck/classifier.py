"""Map measured ping times to a check severity."""

import math
from typing import Sequence

from pingcheck.models import Classification, Condition, Severity


def check(value: float, warn: float, crit: float) -> Severity:
    """Classify a single latency against warning and critical thresholds.

    Raises:
        ValueError: for negative latencies
    """
    if value < 0:
        raise ValueError(f"cannot classify negative latency: {value}")
    if value > crit:
        return Severity.CRITICAL
    if value > warn:
        return Severity.WARNING
    if value <= warn:
        return Severity.OK
    # NaN compares false against everything
    return Severity.UNKNOWN


def min_rtt(times: Sequence[float | None]) -> tuple[float, int] | None:
    """Find the smallest usable ping time and its index.

    None and NaN entries are skipped. The first index wins on ties.
    """
    best = None
    for index, value in enumerate(times):
        if value is None or math.isnan(value):
            continue
        if best is None or value < best[0]:
            best = (value, index)
    return best


def classify(times: Sequence[float | None], warn: float, crit: float) -> Classification:
    """Derive the overall severity from the best ping time of all targets.

    Raises:
        ValueError: if any measured latency is negative
    """
    if not times:
        return Classification(Severity.UNKNOWN, Condition.NO_TARGETS)

    negative = [value for value in times if value is not None and value < 0]
    if negative:
        raise ValueError(f"cannot classify negative latency: {negative[0]}")

    found = min_rtt(times)
    if found is None:
        return Classification(Severity.CRITICAL, Condition.NO_DATA)

    best, index = found
    return Classification(check(best, warn, crit), Condition.MEASURED, best, index)
