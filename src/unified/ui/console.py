"""Console output formatting utilities for unified."""

from __future__ import annotations

import json
import sys
from typing import Any, Iterable, Optional, Tuple


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))

    def print_tasks(self, tasks: Iterable[Tuple[str, dict]]) -> None:
        """
        Print one line per task with its description.

        Args:
            tasks: (dotted_name, descriptor) pairs, as yielded by iter_tasks
        """
        rows = list(tasks)
        if not rows:
            print("No tasks defined.")
            return
        width = max(len(name) for name, _ in rows)
        for name, descriptor in rows:
            description = descriptor.get("description") or ""
            print(f"  {name.ljust(width)}  {description}".rstrip())

    def print_script(self, script: str) -> None:
        """Print a rendered command string, unadorned so it can be piped."""
        print(script)

    def print_json(self, value: Any) -> None:
        """Print a value as indented JSON."""
        print(json.dumps(value, indent=2))

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
