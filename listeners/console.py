import json
from colorama import Fore, Style

from .base import Listener


def describe_error(error) -> str:
    if error is None:
        return ''
    text = f"{type(error).__name__}: {error}"
    if error.__cause__ is not None:
        text += f" (caused by {type(error.__cause__).__name__}: {error.__cause__})"
    return text


class ConsoleListener(Listener):
    """Prints colored progress lines; `show_steps=False` keeps only per-run lines."""

    def __init__(self, show_steps: bool = True):
        self.show_steps = show_steps

    def start_test_run(self, test_run, result):
        browser = test_run.browser_options.get('browserName', '?')
        if result.success:
            print(f"{test_run.name}: {Fore.GREEN}Starting test {Fore.YELLOW}({browser}){Style.RESET_ALL}")
        else:
            print(f"{test_run.name}: {Fore.RED}Unable to start test{Style.RESET_ALL}: "
                  f"{describe_error(result.error)}")

    def end_test_run(self, test_run, result):
        if result.success:
            print(f"{test_run.name}: {Fore.GREEN}Test passed{Style.RESET_ALL}")
            return
        message = f"{test_run.name}: {Fore.RED}Test failed{Style.RESET_ALL}"
        if result.error is not None:
            message += f": {describe_error(result.error)}"
        if result.additional_error is not None:
            message += f" (also: {describe_error(result.additional_error)})"
        print(message)

    def end_step(self, test_run, step, result):
        if not self.show_steps:
            return
        if result.success:
            print(f"{test_run.name}: {Fore.GREEN}Success{Style.RESET_ALL} "
                  f"{Style.DIM}{json.dumps(step, default=str)}{Style.RESET_ALL}")
        elif result.error is not None:
            print(f"{test_run.name}: {Fore.RED}Failed{Style.RESET_ALL} {describe_error(result.error)}")
        else:
            print(f"{test_run.name}: {Fore.RED}Failed{Style.RESET_ALL} "
                  f"{Style.DIM}{json.dumps(step, default=str)}{Style.RESET_ALL}")


def get_interpreter_listener(test_run=None, options=None):
    """Listener factory with the same signature plugin listener modules expose."""
    options = options or {}
    return ConsoleListener(show_steps=not options.get('quiet', False))
