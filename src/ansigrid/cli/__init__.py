"""Command-line inspector for ANSI documents."""

from ansigrid.cli.app import create_app
from ansigrid.cli.main import main

__all__ = ["create_app", "main"]
