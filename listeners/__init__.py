"""Listeners reporting run and step progress."""

from .base import Listener
from .console import ConsoleListener, get_interpreter_listener

__all__ = ['Listener', 'ConsoleListener', 'get_interpreter_listener']
