"""An example step executor factory that adds a single step type: "meow"."""

from interpreter.results import StepResult


class Meow:
    name = 'meow'
    cmp = None

    async def run(self, test_run):
        if not test_run.silence_prints:
            print("meow!")
        return StepResult.passed()


def get(step_type):
    if step_type == 'meow':
        return Meow()
    return None
