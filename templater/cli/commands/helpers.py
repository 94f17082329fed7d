"""
TEMPLATER CLI - Shared Helper Functions

Prompt helpers, input validation and output file writing used across CLI
commands.
"""

import re
from pathlib import Path
from typing import Dict, List, Tuple, Union

import click
import questionary
from questionary import Style


# Custom style for questionary prompts
custom_style = Style([
    ('qmark', 'fg:#673ab7 bold'),          # Question mark
    ('question', 'bold'),                   # Question text
    ('answer', 'fg:#2196f3 bold'),         # Selected answer
    ('pointer', 'fg:#673ab7 bold'),        # Selection pointer
    ('highlighted', 'fg:#2196f3 bold'),    # Highlighted choice
    ('selected', 'fg:#4caf50 bold'),       # Selected choice
    ('separator', 'fg:#cc5454'),           # Separator
    ('instruction', ''),                    # Instructions
    ('text', ''),                           # Plain text
    ('disabled', 'fg:#858585 italic')      # Disabled choices
])

_TEMPLATE_FILENAME = re.compile(r'^[a-zA-Z0-9_-]+$')
_EXTENSION = re.compile(r'^[a-zA-Z0-9]+(\.[a-zA-Z0-9]+)*$')


def ask(question: questionary.Question):
    """
    Ask a questionary question, aborting the command on Ctrl-C.

    Returns:
        The user's answer
    """
    answer = question.ask()
    if answer is None:
        raise click.Abort()
    return answer


# =============================================================================
# Input validation (questionary style: True or an error message)
# =============================================================================

def validate_not_empty(text: str, what: str = "Value"):
    if not text or not text.strip():
        return f"{what} cannot be empty"
    return True


def validate_directory(text: str):
    """
    Validate a directory path typed by the user.

    Returns:
        True if valid, error message string if invalid
    """
    check = validate_not_empty(text, "Directory")
    if check is not True:
        return check
    if '\0' in text:
        return "Directory cannot contain null characters"
    return True


def validate_template_filename(text: str):
    """
    Validate the filename (and directory name) of a new template.

    Returns:
        True if valid, error message string if invalid
    """
    if not text or not text.strip():
        return "Template filename cannot be empty"
    if not _TEMPLATE_FILENAME.match(text.strip()):
        return "The filename must only contain letters, numbers, underscores and dashes"
    return True


def validate_extension(text: str, allow_empty: bool = False):
    """
    Validate an output file extension such as "ts" or "d.ts".

    Returns:
        True if valid, error message string if invalid
    """
    if not text or not text.strip():
        return True if allow_empty else "Output extension cannot be empty"
    if not _EXTENSION.match(text.strip().lstrip('.')):
        return "Output extension must only contain letters, numbers and dots"
    return True


# =============================================================================
# Parsing
# =============================================================================

def parse_list(text: str) -> List[str]:
    """
    Parse a comma-separated list, dropping blanks and duplicates.

    Examples:
        "entity, Entity,,entity" -> ["entity", "Entity"]
    """
    items = []
    for item in (text or '').split(','):
        item = item.strip()
        if item and item not in items:
            items.append(item)
    return items


def parse_dependencies(text: str) -> Tuple[Dict[str, str], List[str]]:
    """
    Parse a comma-separated ``name@version`` list.

    The last ``@`` separates name and version, so scoped packages work:
    "@hono/zod-validator@^0.4.1" -> {"@hono/zod-validator": "^0.4.1"}

    Returns:
        Tuple of (dependencies, invalid entries)
    """
    dependencies: Dict[str, str] = {}
    invalid: List[str] = []

    for entry in parse_list(text):
        at_index = entry.rfind('@')
        name = entry[:at_index].strip() if at_index > 0 else ''
        version = entry[at_index + 1:].strip() if at_index > 0 else ''
        if name and version:
            dependencies[name] = version
        else:
            invalid.append(entry)

    return dependencies, invalid


# =============================================================================
# Output files
# =============================================================================

def incremental_name(path: Path, increment: int) -> Path:
    """
    Path with ``_<increment>`` appended to its stem.

    Examples:
        src/user.ts, 2 -> src/user_2.ts
        src/user.types.ts, 1 -> src/user.types_1.ts
    """
    if not increment:
        return path
    return path.with_name(f"{path.stem}_{increment}{path.suffix}")


def write_file_with_incremental_name(path: Union[str, Path], content: str, increment: bool = False) -> Path:
    """
    Create a file without ever replacing an existing one.

    Args:
        path: Desired file path
        content: Text to write
        increment: Try ``<stem>_1<ext>``, ``<stem>_2<ext>``, ... instead of failing

    Returns:
        The path actually written

    Raises:
        FileExistsError: If the file exists and ``increment`` is False
    """
    path = Path(path)
    attempt = 0
    while True:
        candidate = incremental_name(path, attempt)
        try:
            with open(candidate, 'x', encoding='utf-8') as f:
                f.write(content)
            return candidate
        except FileExistsError:
            if not increment:
                raise
            attempt += 1


def write_output_file(path: Union[str, Path], content: str, overwrite: bool = False, append: bool = False) -> Path:
    """
    Write generated content, resolving conflicts with an existing file.

    New files are created. An existing file is replaced with ``overwrite``
    (which wins over ``append``), extended after a newline with ``append``,
    and otherwise left alone while the content goes to the next free
    incremental name.

    Returns:
        The path written to
    """
    path = Path(path)

    if not path.exists():
        return write_file_with_incremental_name(path, content)

    if overwrite:
        path.write_text(content, encoding='utf-8')
        return path

    if append:
        with open(path, 'a', encoding='utf-8') as f:
            f.write(f"\n{content}")
        return path

    return write_file_with_incremental_name(path, content, increment=True)


__all__ = [
    'custom_style',
    'ask',
    'validate_not_empty',
    'validate_directory',
    'validate_template_filename',
    'validate_extension',
    'parse_list',
    'parse_dependencies',
    'incremental_name',
    'write_file_with_incremental_name',
    'write_output_file',
]
