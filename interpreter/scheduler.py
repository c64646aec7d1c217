import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .results import StepResult
from .test_run import TestRun

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Aggregate outcome of a batch of runs."""
    total: int
    successes: int
    results: List[StepResult] = field(default_factory=list)

    @property
    def failures(self) -> int:
        return self.total - self.successes

    @property
    def empty(self) -> bool:
        return self.total == 0

    @property
    def all_passed(self) -> bool:
        return not self.empty and self.successes == self.total


class Scheduler:
    """
    Runs TestRuns over N lanes; each lane claims the next unclaimed index
    as soon as its current run finishes.
    """

    def __init__(self, test_runs: List[TestRun], parallel: int = 1, listener=None):
        self.test_runs = list(test_runs)
        self.parallel = max(1, int(parallel))
        self.listener = listener
        self._next_index = 0
        self._results: List[Optional[StepResult]] = [None] * len(self.test_runs)

        if self.parallel > 1 and any(r.inherit_from is not None or r.defer_teardown for r in self.test_runs):
            logger.warning(
                f"Runs share browser sessions; running serially instead of {self.parallel} in parallel"
            )
            self.parallel = 1

    async def run(self) -> RunSummary:
        lanes = [asyncio.create_task(self._lane(i)) for i in range(self.parallel)]
        await asyncio.gather(*lanes)

        results = [r for r in self._results if r is not None]
        successes = sum(1 for r in results if r.success)
        summary = RunSummary(total=len(self.test_runs), successes=successes, results=results)

        if self.listener is not None and hasattr(self.listener, 'end_all_runs'):
            self.listener.end_all_runs(summary.total, summary.successes)
        return summary

    def _claim(self) -> Optional[int]:
        if self._next_index >= len(self.test_runs):
            return None
        index = self._next_index
        self._next_index += 1
        return index

    async def _lane(self, lane: int):
        while True:
            index = self._claim()
            if index is None:
                logger.debug(f"Lane {lane} finished")
                return
            test_run = self.test_runs[index]
            logger.info(f"Lane {lane}: running {test_run.name} ({index + 1}/{len(self.test_runs)})")
            self._results[index] = await test_run.run()
