"""unitconv CLI - Main entry point."""

from unitconv.cli.interactive import InteractiveSession
from unitconv.cli.main import app, main

__all__ = ["app", "main", "InteractiveSession"]
