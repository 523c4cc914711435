"""
CLI module for confviz.

Provides the command-line interface using Click.
"""

from confviz.cli.main import build_configuration, cli, main

__all__ = ["build_configuration", "cli", "main"]
