class InterpreterError(Exception):
    """Base class for every error raised by the interpreter."""


class LoadError(InterpreterError):
    """A script, suite, config or data file could not be loaded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to load {path}: {reason}")


class UnresolvedStepTypeError(InterpreterError):
    """No executor factory knows the requested step type."""

    def __init__(self, step_type: str):
        self.step_type = step_type
        super().__init__(f"Unable to load step type {step_type}.")


class AssertionMismatchError(InterpreterError):
    """An assert (or aborting verify) step did not hold."""


class WaitTimeoutError(InterpreterError):
    """A waitFor step ran out of time before its condition held."""


class SessionError(InterpreterError):
    """The WebDriver session failed to start, run a command, or quit."""


class MissingParameterError(InterpreterError):
    """A step was asked for a parameter it does not define."""

    def __init__(self, name: str, step_number: int):
        self.name = name
        self.step_number = step_number
        super().__init__(f'Missing parameter "{name}" in step #{step_number}.')


class PluginError(InterpreterError):
    """A listener, executor factory or data source module failed to load."""
