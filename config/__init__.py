"""Interpreter-wide configuration constants."""
