import logging
from typing import Iterable, List, Optional

import step_types

logger = logging.getLogger(__name__)


class DefaultExecutorFactory:
    """Serves the built-in step types from the step_types registry."""

    def get(self, step_type: str):
        return step_types.REGISTRY.get(step_type)


class ExecutorRegistry:
    """Resolves step type names to executors across an ordered list of factories."""

    def __init__(self, factories: Optional[Iterable] = None):
        self.factories: List = list(factories) if factories is not None else [DefaultExecutorFactory()]

    def with_override(self, factory) -> 'ExecutorRegistry':
        """Return a registry that consults `factory` before the current ones."""
        return ExecutorRegistry([factory] + self.factories)

    def resolve(self, step_type: str):
        """Return the first executor a factory provides, or None."""
        for factory in self.factories:
            executor = factory.get(step_type)
            if executor is not None:
                return executor
        logger.debug(f"No executor for step type {step_type}")
        return None
