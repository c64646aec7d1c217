import re
from typing import Any, Dict, Mapping

from .keys import substitute_keys

_ENV_TOKEN = re.compile(r'\$\{([^}]+)\}')


def substitute_vars(value: Any, variables: Mapping[str, str]) -> Any:
    """
    Expand ${name} references in a step parameter.

    Each variable is replaced globally in a single pass, in insertion order;
    the result is not rescanned for new references. Names with no variable
    are left verbatim. Non-string values are returned untouched.
    """
    if not isinstance(value, str):
        return value
    for name, replacement in variables.items():
        value = value.replace('${' + name + '}', as_text(replacement))
    return value


def substitute_params(value: Any, variables: Mapping[str, str]) -> Any:
    """Variable substitution followed by !{KEY} expansion."""
    value = substitute_vars(value, variables)
    if isinstance(value, str):
        value = substitute_keys(value)
    return value


def substitute_env(text: str, environ: Mapping[str, str]) -> str:
    """Replace ${VAR} in raw file text with values from `environ`; unset stays verbatim."""
    def replace(match):
        return environ.get(match.group(1), match.group(0))

    return _ENV_TOKEN.sub(replace, text)


def as_text(value: Any) -> str:
    """String form used for variable values and cmp comparisons."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def seed_variables(*rows: Mapping[str, Any]) -> Dict[str, str]:
    """Merge data rows into a fresh variable mapping; later rows win."""
    variables = {}
    for row in rows:
        for name, value in (row or {}).items():
            variables[str(name)] = as_text(value)
    return variables
