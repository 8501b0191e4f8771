"""
Rich formatting utilities for consistent terminal output.

"Beauty is in the eye of the beholder. But colors help." — schema.cx
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# Centralized console instance
console = Console()


class Colors:
    """Consistent color scheme for the application."""
    SUCCESS = "green"
    ERROR = "red"
    WARNING = "yellow"
    INFO = "cyan"
    MUTED = "dim"
    REPO_NAME = "bold blue"


def print_success(message: str, prefix: str = "✅") -> None:
    """Print a success message in green."""
    console.print(f"[{Colors.SUCCESS}]{prefix} {message}[/{Colors.SUCCESS}]")


def print_error(message: str, prefix: str = "❌") -> None:
    """Print an error message in red."""
    console.print(f"[{Colors.ERROR}]{prefix} {escape(message)}[/{Colors.ERROR}]")


def print_warning(message: str, prefix: str = "⚠️") -> None:
    """Print a warning message in yellow."""
    console.print(f"[{Colors.WARNING}]{prefix} {escape(message)}[/{Colors.WARNING}]")


def print_header(title: str, subtitle: str | None = None) -> None:
    """Print a formatted header with optional subtitle."""
    text = Text()
    text.append(title, style="bold cyan")
    if subtitle:
        text.append(f"\n{subtitle}", style="dim")

    console.print(Panel(text, border_style="cyan", padding=(0, 1)))


def create_summary_table(title: str) -> Table:
    """Create a styled table for summary statistics."""
    return Table(title=title, show_header=True, header_style="bold cyan", border_style="cyan")


def format_repo_name(full_name: str) -> str:
    """Format a repository name with consistent styling."""
    return f"[{Colors.REPO_NAME}]{full_name}[/{Colors.REPO_NAME}]"


def format_size(num_bytes: int) -> str:
    """Format a byte count for humans (B, KB, MB, GB)."""
    size = float(num_bytes)
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"
