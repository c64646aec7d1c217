import asyncio
import base64
import logging
import time
from pathlib import Path

from interpreter.exceptions import InterpreterError
from interpreter.results import StepResult
from .base import action

logger = logging.getLogger(__name__)


@action('saveScreenshot')
async def save_screenshot(tr):
    image = await tr.do('take_screenshot')
    if 'file' in tr.current_step():
        path = Path(tr.p('file'))
    else:
        path = Path(f"{tr.name}-{int(time.time() * 1000)}.png")
    await asyncio.to_thread(path.write_bytes, base64.b64decode(image))
    logger.info(f"Saved screenshot to {path}")


@action('setWindowSize')
async def set_window_size(tr):
    await tr.do('set_window_size', int(tr.p('width')), int(tr.p('height')))


@action('switchToWindowByTitle')
async def switch_to_window_by_title(tr):
    required = tr.p('title')
    for handle in await tr.do('window_handles'):
        await tr.do('switch_to_window', handle)
        if await tr.do('title') == required:
            return None
    return StepResult.failed(InterpreterError(f"No window with title {required} found."))
