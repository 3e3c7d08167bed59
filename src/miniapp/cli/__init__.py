"""Command line interface: wizard, setup, create, check-env and serve."""

from .app import app, main

__all__ = ["app", "main"]
