"""Worker classes for background sampling tasks."""

import logging
from typing import Iterable

from PySide6.QtCore import QRunnable

from pingcheck.models import Outcome
from pingcheck.sampler import TargetSampler

logger = logging.getLogger(__name__)


class SamplerWorker(QRunnable):
    """Worker that runs one TargetSampler over one outcome stream in a pool thread.

    The worker is the only writer of ``best``, ``attempts`` and ``error``;
    readers must wait for the pool to finish first.
    """

    def __init__(self, index: int, outcomes: Iterable[Outcome], cutoff: float):
        super().__init__()
        # Results are read after the pool is done, so Qt must not delete us
        self.setAutoDelete(False)
        self.index = index
        self.outcomes = outcomes
        self.sampler = TargetSampler(cutoff)
        self.best: float | None = None
        self.attempts = 0
        self.error: Exception | None = None

    def run(self):
        """Execute the sampling task in background thread."""
        try:
            logger.debug("Worker starting: index=%d", self.index)

            self.best = self.sampler.run(self.outcomes)

            logger.debug(
                "Worker completed: index=%d, attempts=%d, best=%s",
                self.index,
                self.sampler.attempts,
                self.best,
            )

        except Exception as e:
            # Handed back to the aggregator, which raises after the join
            logger.exception("Worker exception: index=%d, error=%s", self.index, str(e))
            self.error = e

        finally:
            self.attempts = self.sampler.attempts
