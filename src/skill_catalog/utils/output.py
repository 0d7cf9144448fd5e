"""Rich console output utilities."""

from rich.console import Console
from rich.markup import escape


console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]✗[/red] {escape(message)}", style="red")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {escape(message)}")
