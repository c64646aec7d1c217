#!/usr/bin/env python3
"""
SE Interpreter
Runs JSON/YAML browser test scripts, suites and configs against a WebDriver server.
"""

import asyncio
import logging
import sys
import argparse
from typing import Dict, List
from colorama import init, Fore, Style

from config.constants import (
    DEFAULT_BROWSER, EXIT_FAILURE, EXIT_LOAD_ERROR, EXIT_PLUGIN_ERROR, EXIT_SUCCESS, INTERPRETER_VERSION
)
from interpreter import LoadError, LoadOptions, PluginError, Scheduler, ScriptLoader
from interpreter.plugins import load_module
from listeners import get_interpreter_listener as console_listener

# Initialize colorama
init(autoreset=True)

logger = logging.getLogger(__name__)

PASSTHROUGH_PREFIXES = ('browser-', 'driver-', 'listener-')


def configure_logging(silent: bool, quiet: bool):
    level = logging.INFO
    if silent:
        level = logging.ERROR
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def print_banner():
    """Print welcome banner."""
    print(f"{Fore.CYAN}SE-Interpreter {INTERPRETER_VERSION}{Style.RESET_ALL}")


def print_summary(summary):
    """Print the final tally."""
    if summary.empty:
        print(f"{Fore.YELLOW}No tests found. Exiting.{Style.RESET_ALL}")
        return
    color = Fore.GREEN if summary.all_passed else Fore.RED
    print(f"{color}{summary.successes}/{summary.total} tests ran successfully. Exiting{Style.RESET_ALL}")


def is_passthrough(arg: str) -> bool:
    return arg.startswith('--') and arg[2:].startswith(PASSTHROUGH_PREFIXES)


def split_passthrough(argv: List[str]):
    """
    Pull --browser-*, --driver-* and --listener-* options (with their
    values) out of argv so argparse never mistakes a value for a path.
    """
    rest, passthrough = [], []
    i = 0
    while i < len(argv):
        arg = argv[i]
        i += 1
        if not is_passthrough(arg):
            rest.append(arg)
            continue
        passthrough.append(arg)
        if '=' not in arg and i < len(argv) and not argv[i].startswith('--'):
            passthrough.append(argv[i])
            i += 1
    return rest, passthrough


def parse_passthrough(extra: List[str]) -> Dict[str, Dict]:
    """
    Collect --browser-*, --driver-* and --listener-* options.

    Accepts `--browser-browserName=chrome` and `--browser-browserName chrome`;
    an option given more than once becomes a list.
    """
    options = {prefix[:-1]: {} for prefix in PASSTHROUGH_PREFIXES}
    i = 0
    while i < len(extra):
        arg = extra[i]
        i += 1
        if not is_passthrough(arg):
            raise ValueError(f"unrecognized argument: {arg}")

        key, sep, value = arg[2:].partition('=')
        if not sep:
            if i < len(extra) and not extra[i].startswith('--'):
                value = extra[i]
                i += 1
            else:
                value = 'true'

        group, _, name = key.partition('-')
        bucket = options[group]
        value = coerce(value)
        if name in bucket:
            existing = bucket[name]
            bucket[name] = (existing if isinstance(existing, list) else [existing]) + [value]
        else:
            bucket[name] = value
    return options


def coerce(value: str):
    if value.isdigit():
        return int(value)
    if value in ('true', 'false'):
        return value == 'true'
    return value


def browser_option_sets(browser_options: Dict) -> List[Dict]:
    """One option set per browser when --browser-browserName is repeated."""
    base = {'browserName': DEFAULT_BROWSER}
    base.update(browser_options)
    names = base['browserName']
    if not isinstance(names, list):
        return [base]
    return [dict(base, browserName=name) for name in names]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Runs browser test scripts against a WebDriver server.',
        epilog='Prefix browser options like browserName with "browser-", e.g. --browser-browserName=firefox. '
               'Prefix driver options like host with "driver-", e.g. --driver-host=webdriver.example.com. '
               'Prefix listener module options with "listener-".'
    )

    parser.add_argument(
        'paths',
        nargs='+',
        help='Script, suite or config files (glob patterns allowed)'
    )

    parser.add_argument(
        '--quiet',
        action='store_true',
        help='No per-step output'
    )

    parser.add_argument(
        '--noPrint',
        action='store_true',
        help='No output from print steps'
    )

    parser.add_argument(
        '--silent',
        action='store_true',
        help='No non-error output'
    )

    parser.add_argument(
        '--parallel',
        type=int,
        default=1,
        help='Number of tests to run in parallel'
    )

    parser.add_argument(
        '--listener',
        help='Path to listener module'
    )

    parser.add_argument(
        '--executorFactory',
        help='Path to factory module for extra step types'
    )

    parser.add_argument(
        '--dataSource',
        action='append',
        default=[],
        help='Path to data source module (repeatable)'
    )

    parser.add_argument(
        '--abortOnVerifyFailure',
        action='store_true',
        help='Stop a run at its first failed verify step'
    )

    return parser


def make_load_options(args, passthrough: Dict[str, Dict]) -> LoadOptions:
    """Resolve plugin modules and flags into loader options."""
    listener_options = dict(passthrough['listener'], quiet=args.quiet)

    listener_factory = None
    if args.listener:
        module = load_module(args.listener, required='get_interpreter_listener')
        listener_factory = module.get_interpreter_listener
    elif not args.silent:
        console = console_listener(None, listener_options)
        listener_factory = lambda test_run, options: console  # noqa: E731

    executor_factory = None
    if args.executorFactory:
        executor_factory = load_module(args.executorFactory, required='get')

    data_sources = [load_module(path, required='load') for path in args.dataSource]

    return LoadOptions(
        driver_options=passthrough['driver'],
        listener_factory=listener_factory,
        listener_options=listener_options,
        executor_factory=executor_factory,
        data_sources=data_sources,
        silence_prints=args.noPrint or args.silent,
        abort_on_verify_failure=args.abortOnVerifyFailure
    )


def main(argv=None):
    parser = build_parser()
    rest, passthrough_args = split_passthrough(sys.argv[1:] if argv is None else list(argv))
    args, extra = parser.parse_known_args(rest)
    try:
        passthrough = parse_passthrough(passthrough_args + extra)
    except ValueError as e:
        parser.error(str(e))

    configure_logging(args.silent, args.quiet)
    if not args.silent:
        print_banner()

    try:
        options = make_load_options(args, passthrough)
    except PluginError as e:
        logger.error(str(e))
        return EXIT_PLUGIN_ERROR

    loader = ScriptLoader(options)
    test_runs = []
    for browser_options in browser_option_sets(passthrough['browser']):
        try:
            test_runs.extend(loader.load_all(args.paths, browser_options))
        except LoadError as e:
            logger.error(str(e))
            return EXIT_LOAD_ERROR

    aggregate_listener = None
    if options.listener_factory is not None:
        aggregate_listener = options.listener_factory(None, options.listener_options)

    scheduler = Scheduler(test_runs, args.parallel, aggregate_listener)
    summary = asyncio.run(scheduler.run())

    if not args.silent:
        print_summary(summary)

    return EXIT_SUCCESS if summary.empty or summary.all_passed else EXIT_FAILURE


if __name__ == '__main__':
    sys.exit(main())
