"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for spinners, colored output, and formatted text.
Supports verbosity levels and --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.markup import escape

from src.sync_engine.errors import ErrorKind, SyncEngineError
from src.sync_engine.models import PullResult


ERROR_HINTS = {
    ErrorKind.AUTH_FAILURE: "Check KIBELA_TOKEN or the token in your config file.",
    ErrorKind.NETWORK_UNREACHABLE: "Check your internet connection and team name.",
    ErrorKind.TIMEOUT: "Check your internet connection and try again.",
    ErrorKind.INVALID_DOCUMENT: "Use 'push' for pulled notes and 'publish' for new ones.",
}


class OutputHandler:
    """Handles all terminal output using Rich library.

    Provides methods for displaying messages, spinners and summaries with
    color coding and verbosity level control.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
        >>> with handler.spinner("Processing..."):
        ...     # Do work
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False, console: Optional[Console] = None):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
            console: Optional Rich console (defaults to stdout)
        """
        self.verbosity = verbosity
        self.console = console or Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green.

        Args:
            message: Success message to display
        """
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red.

        Args:
            message: Error message to display
        """
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow.

        Args:
            message: Warning message to display
        """
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1).

        Args:
            message: Info message to display
        """
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2).

        Args:
            message: Debug message to display
        """
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting.

        Args:
            message: Message to display
        """
        self.console.print(escape(message))

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display a status spinner while a single operation runs.

        Args:
            message: Message to display with spinner

        Example:
            >>> with handler.spinner("Downloading notes..."):
            ...     engine.pull()
        """
        with self.console.status(escape(message), spinner="dots"):
            yield

    def print_pull_summary(self, result: PullResult, directory: str) -> None:
        """Display the outcome of a pull.

        Args:
            result: PullResult returned by the engine
            directory: Sync directory the notes were written to
        """
        if result.written == 0:
            self.console.print("[yellow]No notes to pull[/yellow]")
            return

        self.success(f"Pulled {result.written} note(s) into {directory}")
        if result.total_count is not None and result.total_count != result.written:
            self.info(f"  Server reported {result.total_count} note(s) in total")
        for path in result.paths:
            self.debug(f"  {path}")

    def print_failure(self, action: str, error: SyncEngineError) -> None:
        """Display a classified failure with a hint and, at verbosity 2, its details.

        Args:
            action: What was being attempted (e.g. "pull notes")
            error: Classified error raised by the engine
        """
        self.error(f"Failed to {action}: {error.message}")

        hint = ERROR_HINTS.get(error.kind)
        if hint:
            self.console.print(f"[dim]{escape(hint)}[/dim]")

        payload = error.payload
        self.debug(f"Error kind: {error.kind.value}")
        for message in payload.messages:
            self.debug(f"  GraphQL: {message}")
        if payload.status_code is not None:
            self.debug(f"  HTTP status: {payload.status_code}")
        if payload.code:
            self.debug(f"  Network code: {payload.code}")
        if payload.path:
            self.debug(f"  Path: {payload.path}")
