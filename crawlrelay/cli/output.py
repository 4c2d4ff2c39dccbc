"""Console helpers shared by CLI commands."""

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape


def print_failure(console: Console, message: object) -> None:
    """Print an error message in red without interpreting it as markup."""
    console.print(f"[red]Failed: {escape(str(message))}[/red]")


def print_config_error(console: Console, exc: ValidationError) -> None:
    """Print which settings are missing or invalid.

    Only field names are shown; input values may contain credentials.
    """
    fields = sorted({".".join(str(part) for part in e["loc"]) for e in exc.errors()})
    console.print(
        f"[red]Invalid configuration: missing or invalid "
        f"{escape(', '.join(fields))}[/red]"
    )
