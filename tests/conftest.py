"""Pytest configuration and shared fakes for the interpreter tests."""
import pytest

from drivers.base import WebDriver
from drivers.remote import RemoteWebDriver
from interpreter.exceptions import SessionError
from interpreter.script_loader import Script
from interpreter.test_run import TestRun


class FakeDriver(WebDriver):
    """
    In-memory stand-in for a WebDriver session.

    Elements are keyed by locator value; 'html' is the page body.
    """

    COMMANDS = RemoteWebDriver.COMMANDS

    def __init__(self, page_text='', elements=None, cookies=None, windows=None,
                 fail_init=False, fail_quit=False):
        self.page_text = page_text
        self.elements = elements or {}
        self.cookies = cookies or []
        self.windows = windows or {'main': 'Main'}
        self.current_window = next(iter(self.windows))
        self.fail_init = fail_init
        self.fail_quit = fail_quit
        self.calls = []
        self.capabilities = None
        self.implicit_wait = None
        self.quit_count = 0
        self.url = 'about:blank'

    async def init(self, capabilities):
        self.calls.append(('init',))
        if self.fail_init:
            raise SessionError('could not reach the remote end')
        self.capabilities = capabilities

    async def set_implicit_wait(self, seconds):
        self.implicit_wait = seconds

    async def quit(self):
        self.quit_count += 1
        self.calls.append(('quit',))
        if self.fail_quit:
            raise SessionError('quit failed')

    async def execute(self, command, *args):
        self.calls.append((command,) + args)
        return await super().execute(command, *args)

    async def find_element(self, locator_type, value):
        if value == 'html' or value in self.elements:
            return value
        raise SessionError(f'no such element: {value}')

    async def find_elements(self, locator_type, value):
        return [value] if value in self.elements else []

    async def get(self, url):
        self.url = url

    async def refresh(self):
        pass

    async def back(self):
        pass

    async def forward(self):
        pass

    async def title(self):
        return self.windows[self.current_window]

    async def current_url(self):
        return self.url

    async def element_text(self, element):
        if element == 'html':
            return self.page_text
        return self.elements[element].get('text', '')

    async def element_attribute(self, element, name):
        return self.elements[element].get('attributes', {}).get(name)

    async def element_property(self, element, name):
        return self.elements[element].get(name)

    async def element_css_value(self, element, name):
        return self.elements[element].get('css', {}).get(name, '')

    async def element_selected(self, element):
        return self.elements[element].get('selected', False)

    async def click_element(self, element):
        el = self.elements[element]
        if 'selected' in el:
            el['selected'] = not el['selected']

    async def clear_element(self, element):
        self.elements[element]['value'] = ''

    async def send_keys(self, element, text):
        el = self.elements[element]
        el['value'] = el.get('value', '') + text

    async def all_cookies(self):
        return list(self.cookies)

    async def add_cookie(self, cookie):
        self.cookies.append(cookie)

    async def delete_cookie(self, name):
        self.cookies = [c for c in self.cookies if c['name'] != name]

    async def take_screenshot(self):
        return 'aGVsbG8='

    async def window_handle(self):
        return self.current_window

    async def window_handles(self):
        return list(self.windows)

    async def switch_to_window(self, handle):
        self.current_window = handle

    async def set_window_size(self, width, height):
        self.window_size = (width, height)


class RecordingListener:
    """Collects every listener event in order."""

    def __init__(self):
        self.events = []

    def start_test_run(self, test_run, result):
        self.events.append(('start_test_run', test_run.name, result.success))

    def end_test_run(self, test_run, result):
        self.events.append(('end_test_run', test_run.name, result.success))

    def start_step(self, test_run, step):
        self.events.append(('start_step', step['type']))

    def end_step(self, test_run, step, result):
        self.events.append(('end_step', step['type'], result.success))

    def end_all_runs(self, total_runs, total_successes):
        self.events.append(('end_all_runs', total_runs, total_successes))


@pytest.fixture
def fake_driver():
    return FakeDriver()


@pytest.fixture
def make_run():
    """Build a TestRun over inline steps, wired to a given fake driver."""
    def _make_run(steps, driver=None, name='inline', initial_vars=None, timeout_seconds=None, listener=None):
        driver = driver if driver is not None else FakeDriver()
        script = Script(name=name, path=f'{name}.json', steps=steps, timeout_seconds=timeout_seconds)
        run = TestRun(
            script,
            name=name,
            initial_vars=initial_vars,
            listener=listener,
            driver_factory=lambda options: driver
        )
        run.wait_poll_interval = 0.001
        return run
    return _make_run


@pytest.fixture
def write_file(tmp_path):
    """Write a text file under tmp_path and return its path as a string."""
    def _write(relative, content):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write
