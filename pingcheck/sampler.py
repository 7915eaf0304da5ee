"""Per-target sampling with an attempt cap and a cutoff early stop."""

import logging
import math
from itertools import islice
from typing import Iterable

from pingcheck.models import Outcome

logger = logging.getLogger(__name__)

# Number of ping attempts per target before giving up
MAX_ATTEMPTS = 5


class TargetSampler:
    """Turns one target's outcome stream into its best latency.

    Sampling stops after ``max_attempts`` raw outcomes (replies and missing
    replies alike) or as soon as a reply is faster than ``cutoff``. The best
    latency is only ever touched by the thread running this sampler.
    """

    def __init__(self, cutoff: float, max_attempts: int = MAX_ATTEMPTS):
        if max_attempts <= 0:
            raise ValueError("max_attempts must be positive")

        self.cutoff = cutoff
        self.max_attempts = max_attempts
        self.best: float | None = None
        self.attempts = 0

    def update(self, outcome: float) -> float | None:
        """Fold a reply into the running minimum and return it."""
        if self.best is None or outcome < self.best:
            self.best = outcome
        return self.best

    def should_continue(self, outcome: float) -> bool:
        """Replies at or above the cutoff keep sampling going."""
        return outcome >= self.cutoff

    def run(self, outcomes: Iterable[Outcome]) -> float | None:
        """Consume outcomes in order until a stop condition holds.

        Returns:
            Minimum latency seen, or None if no reply arrived
        """
        for outcome in islice(outcomes, self.max_attempts):
            self.attempts += 1

            # NaN carries no usable latency, treat it like a lost reply
            if outcome is None or math.isnan(outcome):
                continue

            self.update(outcome)
            if not self.should_continue(outcome):
                logger.debug(
                    "Cutoff reached: latency=%.6fs < %.6fs after %d attempts",
                    outcome,
                    self.cutoff,
                    self.attempts,
                )
                break

        return self.best
