from typing import Any, Dict

from interpreter.exceptions import SessionError

# Locator types accepted in step "locator" parameters
LOCATOR_TYPES = ('id', 'name', 'link text', 'css selector', 'xpath')


class WebDriver:
    """
    What the interpreter needs from a browser-automation driver.

    Subclasses implement session setup/teardown and element lookup, and list
    every command step types may invoke through `execute` in COMMANDS.
    """

    COMMANDS = frozenset()

    async def init(self, capabilities: Dict[str, Any]) -> None:
        raise NotImplementedError

    async def set_implicit_wait(self, seconds: float) -> None:
        raise NotImplementedError

    async def find_element(self, locator_type: str, value: str) -> Any:
        raise NotImplementedError

    async def quit(self) -> None:
        raise NotImplementedError

    async def execute(self, command: str, *args) -> Any:
        """Invoke a named driver command with positional arguments."""
        if command not in self.COMMANDS:
            raise SessionError(f'Webdriver has no function "{command}".')
        return await getattr(self, command)(*args)
