"""
TEMPLATER Placeholder Registry

Declares the fixed placeholders available in every template and the
records used by templates and validators to declare their own.

Placeholder wire format is ``{{name}}``: matched literally, case-sensitive,
no escaping and no nesting.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple, Union


TOKEN_PATTERN = re.compile(r'\{\{([^}]+)\}\}')

# Template placeholder keys may contain dashes (e.g. "entity-");
# validator placeholder keys may not.
TEMPLATE_PLACEHOLDER_NAME = re.compile(r'^[a-zA-Z0-9_-]+$')
VALIDATOR_PLACEHOLDER_NAME = re.compile(r'^[a-zA-Z0-9_]+$')

TYPES_PLACEHOLDER = 'types'


@dataclass(frozen=True)
class TemplatePlaceholder:
    """A placeholder declared by a template config."""

    description: Optional[str] = None
    required: bool = False


@dataclass(frozen=True)
class ValidatorPlaceholder:
    """
    A placeholder declared by a validator config.

    ``value`` is either a single string or a sequence of lines.
    """

    description: Optional[str] = None
    value: Union[str, Tuple[str, ...], None] = None
    required: bool = False

    def render(self) -> str:
        """Return the substitution text: lines are joined with newlines, no value is empty."""
        if self.value is None:
            return ''
        if isinstance(self.value, str):
            return self.value
        return '\n'.join(self.value)


# Always handled by the template processor; templates are free to use any of them.
FIXED_PLACEHOLDERS: Mapping[str, TemplatePlaceholder] = MappingProxyType({
    'entity': TemplatePlaceholder('The name of the entity, camelCase format'),
    'entities': TemplatePlaceholder('The name of the entity in plural form, camelCase format'),
    'Entity': TemplatePlaceholder('The name of the entity in PascalCase'),
    'Entities': TemplatePlaceholder('The name of the entity in plural form, in PascalCase'),
    'entity_': TemplatePlaceholder('The name of the entity, snake_case format'),
    'entities_': TemplatePlaceholder('The name of the entity in plural form, snake_case format'),
    'ENTITY_': TemplatePlaceholder('The name of the entity, SCREAMING_SNAKE_CASE format'),
    'ENTITIES_': TemplatePlaceholder('The name of the entity in plural form, SCREAMING_SNAKE_CASE format'),
    'entity-': TemplatePlaceholder('The name of the entity, kebab-case format'),
    'entities-': TemplatePlaceholder('The name of the entity in plural form, kebab-case format'),
    TYPES_PLACEHOLDER: TemplatePlaceholder('Types definitions for the entity'),
})

ENTITY_PLACEHOLDERS: Tuple[str, ...] = tuple(
    name for name in FIXED_PLACEHOLDERS if name != TYPES_PLACEHOLDER
)


def token(name: str) -> str:
    """Return the literal token for a placeholder name."""
    return '{{' + name + '}}'


def find_tokens(text: str) -> List[str]:
    """
    Return the names of all placeholder tokens in ``text``.

    Names are listed once, in order of first appearance.
    """
    seen = []
    for match in TOKEN_PATTERN.finditer(text):
        name = match.group(1)
        if name not in seen:
            seen.append(name)
    return seen


def is_fixed_placeholder(name: str) -> bool:
    return name in FIXED_PLACEHOLDERS


__all__ = [
    'TOKEN_PATTERN',
    'TEMPLATE_PLACEHOLDER_NAME',
    'VALIDATOR_PLACEHOLDER_NAME',
    'TYPES_PLACEHOLDER',
    'TemplatePlaceholder',
    'ValidatorPlaceholder',
    'FIXED_PLACEHOLDERS',
    'ENTITY_PLACEHOLDERS',
    'token',
    'find_tokens',
    'is_fixed_placeholder',
]
