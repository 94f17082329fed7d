"""
TEMPLATER CLI - Utilities

Progress indicators, settings loading and error reporting for CLI commands.
"""

import click
from contextlib import contextmanager
from typing import Dict, List, Optional, Type

from templater.config import Config
from templater.errors import TemplaterError


class CLIError(TemplaterError):
    """
    Error raised by CLI commands for invalid input or environment.

    Attributes:
        message: Error message
        suggestion: Actionable suggestion for the user
        error_code: Optional error code for documentation reference
    """

    default_code = "E000"


def load_settings() -> Type[Config]:
    """
    Return a Config subclass with TEMPLATER_* environment overrides applied.

    The overrides land on a fresh subclass, so the base Config is never
    modified by a CLI invocation.
    """
    class Settings(Config):
        pass

    return Settings.load_from_env()


@contextmanager
def progress_step(message: str):
    """
    Context manager for a single progress step.

    Usage:
        with progress_step("Writing main file"):
            write_main_file()
    """
    click.secho(f"  [....] {message}", fg='blue', nl=False)
    try:
        yield
        click.echo('\r', nl=False)
        click.secho(f"  [ OK ] {message}", fg='green')
    except Exception:
        click.echo('\r', nl=False)
        click.secho(f"  [FAIL] {message}", fg='red')
        raise


def handle_error(error: Exception, context: str = None):
    """
    Handle errors with improved formatting and suggestions.

    Args:
        error: The exception that occurred
        context: Optional context about what operation failed
    """
    click.echo()

    if isinstance(error, TemplaterError):
        if error.error_code:
            click.secho(f"[ERROR {error.error_code}] ", fg='red', bold=True, nl=False)
        else:
            click.secho("[ERROR] ", fg='red', bold=True, nl=False)

        click.secho(error.message, fg='red')

        if error.suggestion:
            click.secho("\n[TIP] ", fg='yellow', bold=True, nl=False)
            click.secho(error.suggestion, fg='yellow')

    elif isinstance(error, FileExistsError):
        click.secho("[ERROR] ", fg='red', bold=True, nl=False)
        click.secho(f"File already exists: {error.filename or error}", fg='red')
        click.secho("\n[TIP] ", fg='yellow', bold=True, nl=False)
        click.secho("Use --overwrite or --append to reuse the existing file.", fg='yellow')

    elif isinstance(error, PermissionError):
        click.secho("[ERROR] ", fg='red', bold=True, nl=False)
        click.secho(f"Permission denied: {error.filename or error}", fg='red')
        click.secho("\n[TIP] ", fg='yellow', bold=True, nl=False)
        click.secho("Check file permissions or run with appropriate privileges.", fg='yellow')

    else:
        click.secho("[ERROR] ", fg='red', bold=True, nl=False)
        if context:
            click.secho(f"{context}: {error}", fg='red')
        else:
            click.secho(str(error), fg='red')

    click.echo()


def section_header(title: str):
    """Display a command banner."""
    click.secho("\n" + "=" * 50, fg='cyan', bold=True)
    click.secho(title, fg='cyan', bold=True)
    click.secho("=" * 50 + "\n", fg='cyan', bold=True)


def success_message(message: str, details: Dict[str, object] = None):
    """
    Display a success message with optional details.

    Args:
        message: Main success message
        details: Optional dict of key-value details to display
    """
    click.echo()
    click.secho("=" * 50, fg='green', bold=True)
    click.secho(f"[SUCCESS] {message}", fg='green', bold=True)
    click.secho("=" * 50, fg='green', bold=True)

    if details:
        click.echo()
        for key, value in details.items():
            click.secho(f"  {key}: ", fg='blue', nl=False)
            click.secho(str(value), fg='cyan')

    click.echo()


def next_steps(steps: List[str], title: str = "Next Steps"):
    """
    Display next steps for the user.

    Args:
        steps: List of step strings
        title: Section title
    """
    click.echo()
    click.secho(f"{title}:", fg='yellow', bold=True)

    for i, step in enumerate(steps, 1):
        click.secho(f"  {i}. ", fg='yellow', nl=False)
        click.secho(step, fg='cyan')

    click.echo()


def print_with_headings(sections: List[tuple], width: Optional[int] = 50):
    """
    Print titled blocks of content.

    Args:
        sections: List of (title, content) tuples
        width: Width of the separator lines
    """
    for title, content in sections:
        click.echo()
        click.secho("-" * width, fg='magenta')
        click.secho(title.upper(), fg='magenta', bold=True)
        click.secho("-" * width, fg='magenta')
        click.echo(content)


__all__ = [
    'CLIError',
    'load_settings',
    'progress_step',
    'handle_error',
    'section_header',
    'success_message',
    'next_steps',
    'print_with_headings',
]
