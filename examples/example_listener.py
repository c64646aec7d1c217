"""An example listener module with every hook implemented."""

import json


class ExampleListener:
    def __init__(self, options):
        self.prefix = options.get('prefix', 'Listener')

    def start_test_run(self, test_run, result):
        print(f"{self.prefix}: test run starting! success: {result.success} error: {result.error}")

    def end_test_run(self, test_run, result):
        print(f"{self.prefix}: test run ending! success: {result.success} error: {result.error}")

    def start_step(self, test_run, step):
        print(f"{self.prefix}: step starting! {json.dumps(step, default=str)}")

    def end_step(self, test_run, step, result):
        print(f"{self.prefix}: step ending! success: {result.success} error: {result.error}")

    def end_all_runs(self, total_runs, total_successes):
        print(f"{self.prefix}: all runs ended! {total_successes}/{total_runs} successful")


def get_interpreter_listener(test_run, options):
    return ExampleListener(options or {})
