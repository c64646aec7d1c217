import logging
from typing import Awaitable, Callable, Dict, Optional

from interpreter.results import StepResult

logger = logging.getLogger(__name__)

# Built-in step types by name, filled in by the @getter and @action decorators
REGISTRY: Dict[str, 'StepType'] = {}


class StepType:
    """
    A runnable step executor.

    Getters produce a value (wrapped in StepResult.value) that the
    assert/verify/store/waitFor prefixes interpret; `cmp` names the step
    parameter the value is compared against, if any. Actions just report
    success. Either kind may return a StepResult to report its own outcome.
    """

    def __init__(self, name: str, func: Callable[..., Awaitable], cmp: Optional[str] = None,
                 is_getter: bool = False):
        self.name = name
        self.func = func
        self.cmp = cmp
        self.is_getter = is_getter

    async def run(self, test_run) -> StepResult:
        outcome = await self.func(test_run)
        if isinstance(outcome, StepResult):
            return outcome
        if self.is_getter:
            return StepResult.passed(outcome)
        return StepResult.passed()

    def __repr__(self):
        return f"<StepType {self.name}>"


def getter(name: str, cmp: Optional[str] = None):
    """Register a coroutine function as a getter step type."""
    def register(func):
        REGISTRY[name] = StepType(name, func, cmp=cmp, is_getter=True)
        return func
    return register


def action(*names: str):
    """Register a coroutine function as an action under one or more names."""
    def register(func):
        for name in names:
            REGISTRY[name] = StepType(name, func)
        return func
    return register
