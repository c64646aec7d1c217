import importlib.util
import logging
from pathlib import Path

from .exceptions import PluginError

logger = logging.getLogger(__name__)


def load_module(path: str, required: str = None):
    """
    Import a Python module from a file path.

    Listener modules provide `get_interpreter_listener(test_run, options)`,
    executor factory modules `get(step_type)`, and data source modules
    `name` plus `load(config, script_path)`. `required` names the attribute
    the module must define.
    """
    resolved = Path(path).resolve()
    try:
        spec = importlib.util.spec_from_file_location(resolved.stem, resolved)
        if spec is None or spec.loader is None:
            raise ImportError(f"not a Python module: {resolved}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    except Exception as e:
        raise PluginError(f'Unable to load module from "{resolved}": {e}') from e

    if required and not hasattr(module, required):
        raise PluginError(f'Module "{resolved}" does not define {required}')
    logger.debug(f"Loaded plugin module {resolved}")
    return module
