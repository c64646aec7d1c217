class Listener:
    """
    Observer of test runs. Every hook is optional; subclasses override the
    ones they care about, and plain objects defining any subset work too.
    """

    def start_test_run(self, test_run, result):
        pass

    def end_test_run(self, test_run, result):
        pass

    def start_step(self, test_run, step):
        pass

    def end_step(self, test_run, step, result):
        pass

    def end_all_runs(self, total_runs, total_successes):
        pass
