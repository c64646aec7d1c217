import aiohttp
import asyncio
import logging
from typing import Any, Dict, List, Optional

from config.constants import COMMAND_TIMEOUT, WEBDRIVER_HOST, WEBDRIVER_PATH, WEBDRIVER_PORT
from interpreter.exceptions import SessionError
from .base import LOCATOR_TYPES, WebDriver

logger = logging.getLogger(__name__)

ELEMENT_KEY = 'element-6066-11e4-a52e-4f735466cecf'


def css_string(value: str) -> str:
    """Escape a value for use inside a double-quoted CSS string."""
    escaped = str(value).replace('\\', '\\\\').replace('"', '\\"')
    return escaped.replace('\n', '\\a ')


class RemoteWebDriver(WebDriver):
    """Talks the W3C WebDriver protocol to a remote end (Selenium server, chromedriver, grid)."""

    COMMANDS = frozenset([
        'get', 'refresh', 'back', 'forward', 'title', 'current_url',
        'find_element', 'find_elements',
        'element_text', 'element_attribute', 'element_property', 'element_css_value',
        'element_selected', 'click_element', 'clear_element', 'send_keys',
        'all_cookies', 'add_cookie', 'delete_cookie',
        'take_screenshot', 'window_handle', 'window_handles', 'switch_to_window',
        'set_window_size',
    ])

    def __init__(self, driver_options: Optional[Dict[str, Any]] = None):
        options = driver_options or {}
        self.base_url = self._build_url(options)
        self.timeout = float(options.get('timeout', COMMAND_TIMEOUT))
        self.auth = None
        user = options.get('user')
        password = options.get('accessKey', options.get('pwd'))
        if user and password:
            self.auth = aiohttp.BasicAuth(str(user), str(password))
        self.session_id = None
        self._http = None

    @staticmethod
    def _build_url(options: Dict[str, Any]) -> str:
        if options.get('url'):
            return str(options['url']).rstrip('/')
        host = options.get('host', WEBDRIVER_HOST)
        port = options.get('port', WEBDRIVER_PORT)
        path = str(options.get('path', WEBDRIVER_PATH)).rstrip('/')
        return f"http://{host}:{port}{path}"

    async def init(self, capabilities: Dict[str, Any]) -> None:
        """Open a new browser session."""
        self._http = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            auth=self.auth
        )
        payload = {
            'capabilities': {'alwaysMatch': dict(capabilities)},
            'desiredCapabilities': dict(capabilities)
        }
        try:
            data = await self._call('POST', '/session', payload, raw=True)
        except SessionError:
            await self._close_http()
            raise

        value = data.get('value') or {}
        self.session_id = value.get('sessionId') or data.get('sessionId')
        if not self.session_id:
            await self._close_http()
            raise SessionError(f"No session id returned by {self.base_url}")
        logger.info(f"Started session {self.session_id} on {self.base_url}")

    async def quit(self) -> None:
        """Delete the session and release the HTTP connection pool."""
        try:
            if self.session_id:
                await self._command('DELETE', '')
                logger.info(f"Closed session {self.session_id}")
        finally:
            self.session_id = None
            await self._close_http()

    async def set_implicit_wait(self, seconds: float) -> None:
        await self._command('POST', '/timeouts', {'implicit': int(seconds * 1000)})

    async def find_element(self, locator_type: str, value: str) -> str:
        using, selector = self._strategy(locator_type, value)
        element = await self._command('POST', '/element', {'using': using, 'value': selector})
        return self._element_id(element)

    async def find_elements(self, locator_type: str, value: str) -> List[str]:
        using, selector = self._strategy(locator_type, value)
        elements = await self._command('POST', '/elements', {'using': using, 'value': selector})
        return [self._element_id(e) for e in elements or []]

    # Navigation

    async def get(self, url: str):
        return await self._command('POST', '/url', {'url': url})

    async def refresh(self):
        return await self._command('POST', '/refresh', {})

    async def back(self):
        return await self._command('POST', '/back', {})

    async def forward(self):
        return await self._command('POST', '/forward', {})

    async def title(self) -> str:
        return await self._command('GET', '/title')

    async def current_url(self) -> str:
        return await self._command('GET', '/url')

    # Elements

    async def element_text(self, element: str) -> str:
        return await self._command('GET', f'/element/{element}/text')

    async def element_attribute(self, element: str, name: str):
        return await self._command('GET', f'/element/{element}/attribute/{name}')

    async def element_property(self, element: str, name: str):
        return await self._command('GET', f'/element/{element}/property/{name}')

    async def element_css_value(self, element: str, name: str) -> str:
        return await self._command('GET', f'/element/{element}/css/{name}')

    async def element_selected(self, element: str) -> bool:
        return bool(await self._command('GET', f'/element/{element}/selected'))

    async def click_element(self, element: str):
        return await self._command('POST', f'/element/{element}/click', {})

    async def clear_element(self, element: str):
        return await self._command('POST', f'/element/{element}/clear', {})

    async def send_keys(self, element: str, text: str):
        return await self._command('POST', f'/element/{element}/value', {'text': text})

    # Cookies

    async def all_cookies(self) -> List[Dict[str, Any]]:
        return await self._command('GET', '/cookie') or []

    async def add_cookie(self, cookie: Dict[str, Any]):
        return await self._command('POST', '/cookie', {'cookie': cookie})

    async def delete_cookie(self, name: str):
        return await self._command('DELETE', f'/cookie/{name}')

    # Windows

    async def take_screenshot(self) -> str:
        return await self._command('GET', '/screenshot')

    async def window_handle(self) -> str:
        return await self._command('GET', '/window')

    async def window_handles(self) -> List[str]:
        return await self._command('GET', '/window/handles') or []

    async def switch_to_window(self, handle: str):
        return await self._command('POST', '/window', {'handle': handle})

    async def set_window_size(self, width: int, height: int):
        return await self._command('POST', '/window/rect', {'width': width, 'height': height})

    # Wire helpers

    @staticmethod
    def _strategy(locator_type: str, value: str):
        """Map a script locator onto a W3C location strategy."""
        if locator_type not in LOCATOR_TYPES:
            raise SessionError(f"Unknown locator type: {locator_type}")
        if locator_type in ('id', 'name'):
            return 'css selector', f'[{locator_type}="{css_string(value)}"]'
        return locator_type, value

    @staticmethod
    def _element_id(element: Any) -> str:
        if isinstance(element, dict):
            element_id = element.get(ELEMENT_KEY) or element.get('ELEMENT')
            if element_id:
                return element_id
        raise SessionError(f"Unexpected element reference: {element!r}")

    async def _command(self, method: str, path: str, payload: Optional[Dict] = None):
        if not self.session_id:
            raise SessionError("No driver running.")
        return await self._call(method, f'/session/{self.session_id}{path}', payload)

    async def _call(self, method: str, path: str, payload: Optional[Dict] = None, raw: bool = False):
        if self._http is None:
            raise SessionError("No driver running.")

        url = f"{self.base_url}{path}"
        try:
            async with self._http.request(method, url, json=payload) as response:
                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    data = {}
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method} {path} failed: {e}")
            raise SessionError(f"{method} {path} failed: {e}") from e

        logger.debug(f"{method} {path} -> {status}")

        if not isinstance(data, dict):
            data = {}
        value = data.get('value')
        if status >= 400 or (isinstance(value, dict) and 'error' in value):
            error = value if isinstance(value, dict) else {}
            message = error.get('message') or f"HTTP {status}"
            raise SessionError(f"{error.get('error', 'webdriver error')}: {message}")

        return data if raw else value

    async def _close_http(self):
        if self._http is not None:
            await self._http.close()
            self._http = None
