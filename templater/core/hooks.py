"""
TEMPLATER Processing Hooks

Built-in pre-process and post-process hooks.

Pre-process hooks take the ProcessingOptions and raise on failure.
Post-process hooks take the generated text and the options and return the
new text; they run in registration order, each on the previous output.
"""

import logging
import re
from typing import Callable, List

from templater.core.placeholders import TOKEN_PATTERN, TYPES_PLACEHOLDER, find_tokens
from templater.core.schemas import ProcessingOptions, validate_processing_options
from templater.errors import OptionsInvalid

logger = logging.getLogger(__name__)

PreProcessHook = Callable[[ProcessingOptions], None]
PostProcessHook = Callable[[str, ProcessingOptions], str]

_COMMENTS = re.compile(r'/\*[\s\S]*?\*/|//.*')
_REPEATED_COMMAS = re.compile(r'(?:\s*,)+')
_SEMICOLON_COMMA = re.compile(r';\s*,')
_EMPTY_LINES = re.compile(r'^\s*$(?:\r\n?|\n)', re.MULTILINE)


def validate_options(options: ProcessingOptions) -> None:
    """
    Reject invalid options before any processing happens.

    Raises:
        OptionsInvalid: Listing every violated constraint
    """
    result = validate_processing_options(options)
    if not result:
        raise OptionsInvalid(list(result.errors))


def remove_comments_if_needed(text: str, options: ProcessingOptions) -> str:
    """Remove ``/* ... */`` and ``// ...`` comments when requested."""
    if options.remove_comments:
        return _COMMENTS.sub('', text)
    return text


def remove_leftover_placeholders(text: str, options: ProcessingOptions) -> str:
    """Remove placeholders nobody supplied a value for."""
    leftovers = [name for name in find_tokens(text) if name != TYPES_PLACEHOLDER]
    if leftovers:
        logger.warning(
            "Removing placeholders without a value: "
            + ", ".join('{{' + name + '}}' for name in leftovers)
        )
    return TOKEN_PATTERN.sub('', text)


def normalize_commas(text: str, options: ProcessingOptions = None) -> str:
    """
    Collapse commas left dangling by removed placeholders.

    Examples:
        "a, , b"   -> "a, b"
        "end; ,"   -> "end;"
    """
    result = _REPEATED_COMMAS.sub(',', text)
    return _SEMICOLON_COMMA.sub(';', result)


def remove_multiple_empty_lines(text: str, options: ProcessingOptions = None) -> str:
    """Reduce runs of empty lines to a single empty line."""
    return _EMPTY_LINES.sub('\n', text)


def remove_first_newline(text: str, options: ProcessingOptions = None) -> str:
    """Remove the first character if it is a newline."""
    if text.startswith('\n'):
        return text[1:]
    return text


def default_pre_process_hooks() -> List[PreProcessHook]:
    return [validate_options]


def default_post_process_hooks() -> List[PostProcessHook]:
    return [
        remove_comments_if_needed,
        remove_leftover_placeholders,
        normalize_commas,
        remove_multiple_empty_lines,
        remove_first_newline,
    ]


__all__ = [
    'PreProcessHook',
    'PostProcessHook',
    'validate_options',
    'remove_comments_if_needed',
    'remove_leftover_placeholders',
    'normalize_commas',
    'remove_multiple_empty_lines',
    'remove_first_newline',
    'default_pre_process_hooks',
    'default_post_process_hooks',
]
