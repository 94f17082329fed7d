"""
TEMPLATER Name Formatter

Derives every case variant used by the fixed entity placeholders from a
single entity name.

Examples:
    "blog_post"    -> blogPost / BlogPost / blog_post / BLOG_POST / blog-post
    "user profile" -> userProfile / UserProfile / user_profile / ...

Plural forms are computed per form: the last word of each cased string is
pluralized and keeps its casing ("category" -> Categories / CATEGORIES).
"""

import re
from dataclasses import dataclass
from typing import Dict

import inflect


_WHITESPACE_RUN = re.compile(r'\s+')
_UNDERSCORE_LETTER = re.compile(r'_(\w)')
_LAST_WORD = re.compile(r'([A-Z]?[a-z0-9]+|[A-Z0-9]+)$')

_inflect_engine = inflect.engine()


@dataclass(frozen=True)
class NameForms:
    """The ten case variants of an entity name."""

    camel: str
    camel_plural: str
    pascal: str
    pascal_plural: str
    snake: str
    snake_plural: str
    screaming_snake: str
    screaming_snake_plural: str
    kebab: str
    kebab_plural: str

    def placeholder_values(self) -> Dict[str, str]:
        """Map each fixed entity placeholder name to its value."""
        return {
            'entity': self.camel,
            'entities': self.camel_plural,
            'Entity': self.pascal,
            'Entities': self.pascal_plural,
            'entity_': self.snake,
            'entities_': self.snake_plural,
            'ENTITY_': self.screaming_snake,
            'ENTITIES_': self.screaming_snake_plural,
            'entity-': self.kebab,
            'entities-': self.kebab_plural,
        }


def format_entity_name(text: str) -> str:
    """
    Normalize a user supplied entity name for use in filenames.

    Strips the ends and replaces any run of whitespace with a single
    underscore, keeping the original casing.

    Examples:
        "  user   profile " -> "user_profile"
    """
    return _WHITESPACE_RUN.sub('_', text.strip())


def pluralize(word: str) -> str:
    """
    Pluralize a cased identifier with English rules.

    Only the last word changes, and it keeps its casing:
    "userCategory" -> "userCategories", "USER_CATEGORY" -> "USER_CATEGORIES".
    inflect reads capitalized words as proper nouns, so it is given the
    last word in lower case.
    """
    match = _LAST_WORD.search(word)
    if match is None:
        return _inflect_engine.plural_noun(word)

    prefix, last = word[:match.start()], match.group()
    lowered = last.lower()
    # inflect reads one-letter words as pronouns or articles ("i" -> "we")
    if len(lowered) == 1:
        plural = lowered + 's'
    else:
        plural = _inflect_engine.plural_noun(lowered)

    if last.isupper() and (len(last) > 1 or prefix.isupper()):
        plural = plural.upper()
    elif last[0].isupper():
        plural = plural[:1].upper() + plural[1:]
    return prefix + plural


def to_snake_case(entity_name: str) -> str:
    return _WHITESPACE_RUN.sub('_', entity_name.strip().lower())


def to_camel_case(snake: str) -> str:
    return _UNDERSCORE_LETTER.sub(lambda match: match.group(1).upper(), snake)


def derive_name_forms(entity_name: str) -> NameForms:
    """
    Derive all case variants from an entity name.

    The name is expected to be valid already (see
    ``templater.core.schemas.validate_entity_name``).

    Args:
        entity_name: Raw entity name (e.g., "blog post", "blog_post")

    Returns:
        NameForms with five singular and five plural variants
    """
    snake = to_snake_case(entity_name)
    screaming_snake = snake.upper()
    kebab = snake.replace('_', '-')
    camel = to_camel_case(snake)
    pascal = camel[:1].upper() + camel[1:]

    return NameForms(
        camel=camel,
        camel_plural=pluralize(camel),
        pascal=pascal,
        pascal_plural=pluralize(pascal),
        snake=snake,
        snake_plural=pluralize(snake),
        screaming_snake=screaming_snake,
        screaming_snake_plural=pluralize(screaming_snake),
        kebab=kebab,
        kebab_plural=pluralize(kebab),
    )


__all__ = [
    'NameForms',
    'derive_name_forms',
    'format_entity_name',
    'pluralize',
    'to_snake_case',
    'to_camel_case',
]
