from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class StepResult:
    """Outcome of a step, a run start/end, or a whole run."""
    success: bool = False
    error: Optional[BaseException] = None
    value: Any = None  # set by getters
    additional_error: Optional[BaseException] = None  # e.g. teardown failure behind a primary error

    @classmethod
    def failed(cls, error: Optional[BaseException] = None) -> 'StepResult':
        return cls(success=False, error=error)

    @classmethod
    def passed(cls, value: Any = None) -> 'StepResult':
        return cls(success=True, value=value)


def as_result(outcome: Any) -> StepResult:
    """Accept plugin executors that report plain dicts like {'success': True}."""
    if isinstance(outcome, StepResult):
        return outcome
    if isinstance(outcome, dict):
        return StepResult(
            success=bool(outcome.get('success', 'value' in outcome and not outcome.get('error'))),
            error=outcome.get('error'),
            value=outcome.get('value')
        )
    raise TypeError(f"Step executor returned {type(outcome).__name__}, expected StepResult")
