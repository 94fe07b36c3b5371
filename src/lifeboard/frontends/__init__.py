"""Frontends for running boards."""

from .cli import main

__all__ = ["main"]
