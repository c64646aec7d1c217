"""
Semantic prefixes for getter step types.

A step type like `assertTextPresent` is the `assert` prefix applied to the
`TextPresent` getter. Only the getter has to be implemented per step type;
the prefix decides what its value means:

- assert:  fail the step (and the run) unless the value matches
- verify:  report match/mismatch; a mismatch degrades the run's success
           without halting it, unless the run aborts on verify failures
- store:   save the value into the variable named by `variable`
- waitFor: poll until the value matches or the time budget runs out

"Matches" means the value equals the getter's `cmp` parameter (compared as
strings) or, for getters without one, that the value is truthy. The step's
`negated` flag inverts it.
"""

import asyncio
import logging
from typing import Optional, Tuple

from .exceptions import AssertionMismatchError, WaitTimeoutError
from .results import StepResult, as_result
from .variables import as_text

logger = logging.getLogger(__name__)


async def _fetch(getter, tr) -> StepResult:
    return as_result(await getter.run(tr))


def matches(getter, result: StepResult, tr) -> bool:
    cmp = getattr(getter, 'cmp', None)
    if cmp:
        return as_text(result.value) == as_text(tr.p(cmp))
    return bool(result.value)


def mismatch_message(getter, matched: bool) -> str:
    cmp = getattr(getter, 'cmp', None)
    if cmp:
        return f"{cmp} matches" if matched else f"{cmp} does not match"
    name = getattr(getter, 'name', None) or type(getter).__name__
    return f"{name} is true" if matched else f"{name} is false"


async def assert_prefix(getter, tr) -> StepResult:
    result = await _fetch(getter, tr)
    if result.error:
        return StepResult.failed(result.error)

    matched = matches(getter, result, tr)
    if matched != tr.negated():
        return StepResult.passed()
    return StepResult.failed(AssertionMismatchError(mismatch_message(getter, matched)))


async def verify_prefix(getter, tr) -> StepResult:
    result = await _fetch(getter, tr)
    if result.error:
        return StepResult.failed(result.error)

    matched = matches(getter, result, tr)
    if matched != tr.negated():
        return StepResult.passed()
    if tr.abort_on_verify_failure:
        return StepResult.failed(AssertionMismatchError(mismatch_message(getter, matched)))
    logger.info(f"{tr.name}: verification failed ({mismatch_message(getter, matched)})")
    return StepResult.failed()


async def store_prefix(getter, tr) -> StepResult:
    result = await _fetch(getter, tr)
    if result.error:
        return StepResult.failed(result.error)

    tr.set_var(tr.p('variable'), as_text(result.value))
    return StepResult.passed()


async def wait_for_prefix(getter, tr) -> StepResult:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + tr.wait_timeout
    last_error = None

    while True:
        await asyncio.sleep(tr.wait_poll_interval)
        try:
            result = await _fetch(getter, tr)
        except Exception as e:
            result = StepResult.failed(e)

        if result.error is None:
            if matches(getter, result, tr) != tr.negated():
                return StepResult.passed()
        else:
            last_error = result.error
            logger.debug(f"{tr.name}: waiting, getter failed: {result.error}")

        if loop.time() >= deadline:
            return StepResult.failed(last_error or WaitTimeoutError('Wait timed out.'))


PREFIXES = {
    'assert': assert_prefix,
    'verify': verify_prefix,
    'store': store_prefix,
    'waitFor': wait_for_prefix,
}


def split_prefix(step_type: str) -> Tuple[Optional[str], str]:
    """Split `assertTextPresent` into ('assert', 'TextPresent'); unprefixed types give (None, type)."""
    for prefix in sorted(PREFIXES, key=len, reverse=True):
        if step_type.startswith(prefix) and step_type != prefix:
            return prefix, step_type[len(prefix):]
    return None, step_type
