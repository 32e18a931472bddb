#!/usr/bin/env python3

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler


class Console:
    """Console wrapper: results go to stdout, diagnostics to stderr."""

    def __init__(self):
        self._rich = RichConsole()
        self._err = RichConsole(stderr=True)

    def print(self, *args, **kwargs):
        """Print using Rich console."""
        return self._rich.print(*args, **kwargs)

    def error(self, message: str):
        """Print an error message to stderr."""
        return self._err.print(f"[red]{message}[/red]", highlight=False, soft_wrap=True)

    def setup_logging(self, verbose: bool = False):
        """Route log records through Rich on stderr."""
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(message)s",
            handlers=[RichHandler(console=self._err, show_path=False)],
            force=True,
        )
