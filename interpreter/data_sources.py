import json
import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .exceptions import LoadError
from .variables import substitute_env

logger = logging.getLogger(__name__)

DataRow = Dict[str, Any]


class DataSource:
    """Produces the data rows a script is run once per."""

    name = None

    def load(self, config: Any, script_path: Optional[str] = None) -> List[DataRow]:
        raise NotImplementedError


class NoneSource(DataSource):
    name = 'none'

    def load(self, config=None, script_path=None):
        return [{}]


class ManualSource(DataSource):
    """The config object itself is the only row."""
    name = 'manual'

    def load(self, config=None, script_path=None):
        return [dict(config or {})]


class FileSource(DataSource):
    """Base for sources reading a file named by the config's `path`."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = environ if environ is not None else os.environ

    def resolve_path(self, config: Mapping[str, Any], script_path: Optional[str]) -> Path:
        if not config or 'path' not in config:
            raise LoadError(script_path or '<data>', f'data source "{self.name}" needs a "path"')
        path = Path(config['path'])
        if script_path:
            beside_script = Path(script_path).parent / path
            if beside_script.exists():
                return beside_script
        return path.resolve()

    def read(self, path: Path) -> str:
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(str(path), str(e)) from e


class JsonSource(FileSource):
    """A JSON array of row objects."""
    name = 'json'

    def load(self, config=None, script_path=None):
        path = self.resolve_path(config, script_path)
        try:
            rows = json.loads(substitute_env(self.read(path), self.environ))
        except json.JSONDecodeError as e:
            raise LoadError(str(path), f"invalid JSON: {e}") from e
        if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
            raise LoadError(str(path), "expected a JSON array of objects")
        logger.info(f"Loaded {len(rows)} data rows from {path}")
        return rows


class XmlSource(FileSource):
    """<testdata><test name="value" .../></testdata>, one row per <test>."""
    name = 'xml'

    def load(self, config=None, script_path=None):
        path = self.resolve_path(config, script_path)
        try:
            root = ET.fromstring(self.read(path))
        except ET.ParseError as e:
            raise LoadError(str(path), f"invalid XML: {e}") from e

        rows = []
        if root.tag == 'testdata':
            for test in root.findall('test'):
                rows.append({
                    substitute_env(k, self.environ): substitute_env(v, self.environ)
                    for k, v in test.attrib.items()
                })
        logger.info(f"Loaded {len(rows)} data rows from {path}")
        return rows


def default_sources(environ: Optional[Mapping[str, str]] = None) -> List[DataSource]:
    return [NoneSource(), ManualSource(), JsonSource(environ), XmlSource(environ)]


def load_data(
    data_config: Mapping[str, Any],
    custom_sources: Optional[Iterable] = None,
    script_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None
) -> List[DataRow]:
    """
    Load the rows for a script's `data` block.

    `data_config` looks like {"source": "json", "configs": {"json": {"path": "rows.json"}}}.
    Custom sources are matched by name before the built-in ones.
    """
    source_name = data_config.get('source', 'none')
    config = (data_config.get('configs') or {}).get(source_name)

    for source in list(custom_sources or []) + default_sources(environ):
        if getattr(source, 'name', None) == source_name:
            return list(source.load(config, script_path))

    raise LoadError(script_path or '<data>', f'No data source of name "{source_name}" available.')
