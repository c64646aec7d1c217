"""Built-in step types: browser getters and actions."""

from .base import REGISTRY, StepType, getter, action
from . import cookies, elements, flow, page, windows  # noqa: F401 (registration)

__all__ = ['REGISTRY', 'StepType', 'getter', 'action']
