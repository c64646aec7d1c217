"""Interpreter core: runs, steps, prefixes, data sources, loading and scheduling."""

from .exceptions import (
    InterpreterError, LoadError, UnresolvedStepTypeError, AssertionMismatchError,
    WaitTimeoutError, SessionError, MissingParameterError, PluginError
)
from .results import StepResult
from .step_executor import ExecutorRegistry, DefaultExecutorFactory
from .test_run import TestRun, RunState
from .data_sources import DataSource, load_data
from .script_loader import Script, ScriptLoader, LoadOptions
from .scheduler import Scheduler, RunSummary

__all__ = [
    'InterpreterError', 'LoadError', 'UnresolvedStepTypeError', 'AssertionMismatchError',
    'WaitTimeoutError', 'SessionError', 'MissingParameterError', 'PluginError',
    'StepResult', 'ExecutorRegistry', 'DefaultExecutorFactory', 'TestRun', 'RunState',
    'DataSource', 'load_data', 'Script', 'ScriptLoader', 'LoadOptions', 'Scheduler', 'RunSummary'
]
