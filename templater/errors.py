"""
TEMPLATER Errors

Exception hierarchy shared by the processing pipeline, the template store
and the CLI. Every error carries an optional actionable suggestion and a
short error code that the CLI prints next to the message.

    TemplaterError
    ├── ConfigurationError          (malformed template/validator config)
    ├── RequestError                (invalid ProcessingOptions)
    ├── ResourceNotFound            (unknown template/validator)
    └── ContractViolation           (template/validator mismatch)
"""

from typing import List, Optional


class TemplaterError(Exception):
    """
    Base exception for TEMPLATER errors.

    Attributes:
        message: Error message
        suggestion: Actionable suggestion for the user
        error_code: Optional error code for documentation reference
    """

    default_code: Optional[str] = None

    def __init__(self, message: str, suggestion: str = None, error_code: str = None):
        self.message = message
        self.suggestion = suggestion
        self.error_code = error_code or self.default_code
        super().__init__(message)


class ConfigurationError(TemplaterError):
    """A template or validator configuration record violates its schema."""

    default_code = "C000"


class TemplateConfigInvalid(ConfigurationError):
    default_code = "C001"


class ValidatorConfigInvalid(ConfigurationError):
    default_code = "C002"


class RequestError(TemplaterError):
    """The per-invocation request is invalid."""

    default_code = "R000"


class OptionsInvalid(RequestError):
    """
    ProcessingOptions failed validation.

    The message lists every violated constraint, numbered; the raw
    messages are kept in ``errors``.
    """

    default_code = "R001"

    def __init__(self, errors: List[str], suggestion: str = None):
        self.errors = list(errors)
        numbered = "\n".join(f"{index}- {error}" for index, error in enumerate(self.errors, 1))
        super().__init__(f"Options are not valid:\n{numbered}", suggestion=suggestion)


class ResourceNotFound(TemplaterError):
    """A named template or validator does not exist."""

    default_code = "N000"


class TemplateNotFound(ResourceNotFound):
    default_code = "N001"


class ValidatorNotFound(ResourceNotFound):
    default_code = "N002"


class ContractViolation(TemplaterError):
    """A validator and a template do not fit together."""

    default_code = "V000"


class MissingRequiredPlaceholder(ContractViolation):
    """
    One or more placeholders marked as required by a validator were never
    found in the template.
    """

    default_code = "V001"

    def __init__(self, placeholders: List[str], validator_name: Optional[str] = None):
        self.placeholders = list(placeholders)
        self.validator_name = validator_name
        lines = [
            f"Validator's placeholder {{{{{name}}}}}, marked as required, was not found in template"
            for name in self.placeholders
        ]
        super().__init__(
            "\n".join(lines),
            suggestion="Check that the chosen validator is meant for this template, "
                       "or add the missing placeholders to the template.",
        )


__all__ = [
    'TemplaterError',
    'ConfigurationError',
    'TemplateConfigInvalid',
    'ValidatorConfigInvalid',
    'RequestError',
    'OptionsInvalid',
    'ResourceNotFound',
    'TemplateNotFound',
    'ValidatorNotFound',
    'ContractViolation',
    'MissingRequiredPlaceholder',
]
