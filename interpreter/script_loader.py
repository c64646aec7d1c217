import glob
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

import yaml

from config.constants import DEFAULT_BROWSER, SCRIPT_SUFFIXES
from .data_sources import load_data
from .exceptions import LoadError
from .step_executor import ExecutorRegistry
from .test_run import TestRun
from .variables import substitute_env

logger = logging.getLogger(__name__)


@dataclass
class Script:
    """A loaded script: read-only, shared by every run made from it."""
    name: str
    path: str
    steps: List[Dict[str, Any]]
    data: Optional[Dict[str, Any]] = None
    timeout_seconds: Optional[float] = None

    @staticmethod
    def from_dict(data: Dict[str, Any], path: str) -> 'Script':
        steps = data.get('steps', [])
        if not isinstance(steps, list) or not all(isinstance(s, dict) for s in steps):
            raise LoadError(path, '"steps" must be a list of objects')

        timeout = data.get('timeoutSeconds')
        if timeout is not None and not isinstance(timeout, (int, float)):
            raise LoadError(path, '"timeoutSeconds" must be a number')

        return Script(
            name=script_name(path),
            path=path,
            steps=steps,
            data=data.get('data'),
            timeout_seconds=timeout
        )


def script_name(path: str) -> str:
    """'tests/login.json' -> 'login'."""
    return Path(path).stem


@dataclass
class LoadOptions:
    """Everything the loader threads into the runs it creates."""
    browser_options: Dict[str, Any] = field(default_factory=lambda: {'browserName': DEFAULT_BROWSER})
    driver_options: Dict[str, Any] = field(default_factory=dict)
    listener_factory: Optional[Callable] = None  # (test_run, listener_options) -> listener
    listener_options: Dict[str, Any] = field(default_factory=dict)
    executor_factory: Any = None
    data_sources: List[Any] = field(default_factory=list)
    silence_prints: bool = False
    abort_on_verify_failure: bool = False
    driver_factory: Optional[Callable] = None
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))


class ScriptLoader:
    """Turns script, suite and interpreter-config files into an ordered list of TestRuns."""

    def __init__(self, options: Optional[LoadOptions] = None):
        self.options = options or LoadOptions()

    def read(self, path: str) -> Dict[str, Any]:
        """Read a file, substitute ${ENV} references, and parse it as JSON or YAML."""
        try:
            raw = Path(path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(path, str(e)) from e

        text = substitute_env(raw, self.options.environ)
        try:
            if path.endswith(('.yaml', '.yml')):
                data = yaml.safe_load(text)
            else:
                data = json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise LoadError(path, f"parse error: {e}") from e

        if not isinstance(data, dict):
            raise LoadError(path, "expected an object at the top level")
        return data

    def load(self, path: str, browser_options: Optional[Dict] = None,
             driver_options: Optional[Dict] = None) -> List[TestRun]:
        """Load any of the three file kinds."""
        logger.info(f"Loading {path}")
        data = self.read(path)
        kind = data.get('type')

        if kind == 'script':
            return self.load_script(path, data, browser_options, driver_options)
        if kind == 'suite':
            return self.load_suite(path, data, browser_options, driver_options)
        if kind == 'interpreter-config':
            return self.load_config(data, browser_options, driver_options)
        raise LoadError(path, f'No type property set in file "{path}".')

    def load_script(self, path: str, data: Optional[Dict] = None, browser_options: Optional[Dict] = None,
                    driver_options: Optional[Dict] = None) -> List[TestRun]:
        """One run per data row of the script."""
        if data is None:
            data = self.read(path)
        script = Script.from_dict(data, path)

        rows = [{}]
        if script.data:
            try:
                rows = load_data(script.data, self.options.data_sources, path, self.options.environ)
            except LoadError:
                raise
            except Exception as e:
                raise LoadError(path, f"data source failed: {e}") from e

        runs = []
        for i, row in enumerate(rows, start=1):
            name = script.name if len(rows) == 1 else f"{script.name}, row {i}"
            runs.append(self._make_run(script, name, row, browser_options, driver_options))
        return runs

    def load_suite(self, path: str, data: Dict, browser_options: Optional[Dict] = None,
                   driver_options: Optional[Dict] = None) -> List[TestRun]:
        """Runs for each local member script; shareState chains them onto one session."""
        runs = []
        members = data.get('scripts', [])
        if not isinstance(members, list):
            raise LoadError(path, '"scripts" must be a list')
        for member in members:
            if not isinstance(member, dict) or not isinstance(member.get('path'), str):
                raise LoadError(path, 'suite member needs a "path"')
            where = member.get('where')
            if where != 'local':
                logger.error(f"Suite members stored using {where} are not supported.")
                continue

            member_path = Path(path).parent / member['path']
            if not member_path.exists():
                member_path = Path(member['path'])
            member_data = self.read(str(member_path))
            if member_data.get('type', 'script') != 'script':
                raise LoadError(str(member_path), "suite members must be scripts")
            runs.extend(self.load_script(str(member_path), member_data, browser_options, driver_options))

        if data.get('shareState') and len(runs) > 1:
            chain(runs)
        return runs

    def load_config(self, data: Dict, browser_options: Optional[Dict] = None,
                    driver_options: Optional[Dict] = None) -> List[TestRun]:
        """
        The cross product of each configuration's settings and matched script files.

        A configuration without settings runs with the given (command line) options.
        """
        runs = []
        for configuration in data.get('configurations', []):
            settings_list = configuration.get('settings') or [{
                'browserOptions': browser_options or self.options.browser_options,
                'driverOptions': driver_options or self.options.driver_options
            }]
            for settings in settings_list:
                for pattern in configuration.get('scripts', []):
                    for path in expand(pattern):
                        runs.extend(self.load(
                            path,
                            settings.get('browserOptions'),
                            settings.get('driverOptions')
                        ))
        return runs

    def load_all(self, patterns: Iterable[str], browser_options: Optional[Dict] = None) -> List[TestRun]:
        """Glob-expand each pattern and load every script-like match."""
        runs = []
        for pattern in patterns:
            for path in expand(pattern):
                runs.extend(self.load(path, browser_options))
        return runs

    def _make_run(self, script: Script, name: str, row: Dict, browser_options: Optional[Dict],
                  driver_options: Optional[Dict]) -> TestRun:
        options = self.options
        executors = ExecutorRegistry()
        if options.executor_factory is not None:
            executors = executors.with_override(options.executor_factory)

        run = TestRun(
            script,
            name=name,
            initial_vars=row,
            browser_options=browser_options or options.browser_options,
            driver_options=driver_options or options.driver_options,
            executors=executors,
            driver_factory=options.driver_factory
        )
        run.silence_prints = options.silence_prints
        run.abort_on_verify_failure = options.abort_on_verify_failure
        if options.listener_factory is not None:
            run.listener = options.listener_factory(run, options.listener_options)
        return run


def chain(runs: List[TestRun]) -> None:
    """Make each run hand its session and variables to the next one."""
    for previous, current in zip(runs, runs[1:]):
        previous.defer_teardown = True
        current.inherit_from = previous


def expand(pattern: str) -> List[str]:
    return [p for p in sorted(glob.glob(pattern)) if p.endswith(SCRIPT_SUFFIXES)]
