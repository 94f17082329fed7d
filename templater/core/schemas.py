"""
TEMPLATER Config Records and Validation

Template and validator configuration records, the per-invocation
ProcessingOptions, and the explicit validation functions that guard them.

Every validation function returns a ValidationResult listing all violated
constraints instead of stopping at the first one. The ``from_dict``
constructors read the on-disk JSON shape (camelCase keys) and raise a
ConfigurationError subclass when validation fails.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from templater.core.placeholders import (
    TEMPLATE_PLACEHOLDER_NAME,
    VALIDATOR_PLACEHOLDER_NAME,
    TemplatePlaceholder,
    ValidatorPlaceholder,
)
from templater.errors import TemplateConfigInvalid, ValidatorConfigInvalid


NO_VALIDATOR = 'none'
DEFAULT_VALIDATOR = 'default'

_ENTITY_ALLOWED_CHARS = re.compile(r'^[a-zA-Z0-9_ ]+$')


@dataclass(frozen=True)
class ValidationResult:
    """Tagged result of a validation: success, or failure with reasons."""

    valid: bool
    errors: Tuple[str, ...] = ()

    @classmethod
    def ok(cls) -> 'ValidationResult':
        return cls(True)

    @classmethod
    def failed(cls, errors: List[str]) -> 'ValidationResult':
        return cls(False, tuple(errors))

    @classmethod
    def from_errors(cls, errors: List[str]) -> 'ValidationResult':
        return cls.failed(errors) if errors else cls.ok()

    def __bool__(self) -> bool:
        return self.valid

    def numbered(self) -> str:
        """Errors as a numbered list, one per line."""
        return "\n".join(f"{index}- {error}" for index, error in enumerate(self.errors, 1))


# =============================================================================
# Entity name
# =============================================================================

def validate_entity_name(text: Any) -> Union[bool, str]:
    """
    Validate an entity name.

    Args:
        text: Entity name to validate

    Returns:
        True if valid, error message string if invalid
    """
    if not isinstance(text, str):
        return "Entity name must be a string"

    text = text.strip()
    if not text:
        return f"Entity name cannot be empty. Your input: '{text}'"

    if text[0].isdigit():
        return f"Entity name must not start with a number. Your input: '{text}'"

    if not _ENTITY_ALLOWED_CHARS.match(text):
        return (
            "Entity name must only contain letters, numbers, spaces and underscores. "
            f"Your input: '{text}'"
        )

    return True


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class TemplateConfig:
    """
    Metadata describing one template.

    ``types_file_output_extension`` being None means the template never
    produces a types file.
    """

    filename: str
    name: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    version: Optional[str] = None
    tags: Tuple[str, ...] = ()
    output_extension: Optional[str] = None
    types_file_output_extension: Optional[str] = None
    placeholders: Mapping[str, TemplatePlaceholder] = field(default_factory=dict)
    validator_support: Tuple[str, ...] = (DEFAULT_VALIDATOR,)
    dependencies: Mapping[str, str] = field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.name is None:
            object.__setattr__(self, 'name', self.filename)

    @property
    def has_types_file(self) -> bool:
        return bool(self.types_file_output_extension)

    def supports_validator(self, validator_name: str) -> bool:
        """``none`` and ``default`` are always supported."""
        return validator_name in (NO_VALIDATOR, DEFAULT_VALIDATOR) or validator_name in self.validator_support

    def required_placeholders(self) -> List[str]:
        return [name for name, placeholder in self.placeholders.items() if placeholder.required]

    @classmethod
    def from_dict(cls, data: Any, source: str = None) -> 'TemplateConfig':
        """
        Build a TemplateConfig from its JSON representation.

        Raises:
            TemplateConfigInvalid: If the data violates the schema
        """
        result = validate_template_config_data(data)
        if not result:
            label = f"Template '{source}'" if source else "Template"
            raise TemplateConfigInvalid(
                f"{label} configuration is invalid:\n{result.numbered()}",
                suggestion="Fix the template's .config.json file and try again.",
            )

        placeholders = {
            name: TemplatePlaceholder(
                description=spec.get('description'),
                required=spec.get('required', False),
            )
            for name, spec in _iter_placeholder_entries(data.get('placeholders'))
        }

        return cls(
            filename=data['filename'],
            name=data.get('name'),
            description=data.get('description'),
            author=data.get('author'),
            version=data.get('version'),
            tags=tuple(data.get('tags') or ()),
            output_extension=data.get('outputExtension') or None,
            types_file_output_extension=data.get('typesFileOutputExtension') or None,
            placeholders=placeholders,
            validator_support=tuple(data.get('validatorSupport', [DEFAULT_VALIDATOR])),
            dependencies=dict(data.get('dependencies') or {}),
            dev_dependencies=dict(data.get('devDependencies') or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON representation, camelCase keys, optional fields omitted when unset."""
        data = {
            'name': self.name,
            'description': self.description,
            'author': self.author,
            'version': self.version,
            'tags': list(self.tags) or None,
            'filename': self.filename,
            'outputExtension': self.output_extension,
            'typesFileOutputExtension': self.types_file_output_extension,
            'validatorSupport': list(self.validator_support),
            'placeholders': {
                name: _drop_none({'description': placeholder.description, 'required': placeholder.required})
                if isinstance(placeholder, TemplatePlaceholder) else placeholder
                for name, placeholder in self.placeholders.items()
            },
            'dependencies': dict(self.dependencies),
            'devDependencies': dict(self.dev_dependencies),
        }
        return _drop_none(data)


@dataclass(frozen=True)
class ValidatorConfig:
    """A validator profile scoped to a template."""

    name: Optional[str] = None
    description: Optional[str] = None
    author: str = 'unknown'
    placeholders: Mapping[str, ValidatorPlaceholder] = field(default_factory=dict)
    dependencies: Mapping[str, str] = field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, source: str = None) -> 'ValidatorConfig':
        """
        Build a ValidatorConfig from its JSON representation.

        Raises:
            ValidatorConfigInvalid: If the data violates the schema
        """
        result = validate_validator_config_data(data)
        if not result:
            name = source or (data.get('name') if isinstance(data, Mapping) else None)
            raise ValidatorConfigInvalid(
                f"{_validator_label(name)} configs are not valid:\n{result.numbered()}",
                suggestion="Fix the validator's .config.json file and try again.",
            )

        placeholders = {}
        for name, spec in (data.get('placeholders') or {}).items():
            value = spec.get('value')
            if isinstance(value, list):
                value = tuple(value)
            placeholders[name] = ValidatorPlaceholder(
                description=spec.get('description'),
                value=value,
                required=spec.get('required', False),
            )

        return cls(
            name=data.get('name'),
            description=data.get('description'),
            author=data.get('author', 'unknown'),
            placeholders=placeholders,
            dependencies=dict(data.get('dependencies') or {}),
            dev_dependencies=dict(data.get('devDependencies') or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        placeholders = {}
        for name, placeholder in self.placeholders.items():
            if not isinstance(placeholder, ValidatorPlaceholder):
                # Hand-built records may hold anything; validation reports it
                placeholders[name] = placeholder
                continue
            value = placeholder.value
            if isinstance(value, tuple):
                value = list(value)
            placeholders[name] = _drop_none({
                'description': placeholder.description,
                'value': value,
                'required': placeholder.required,
            })
        return _drop_none({
            'name': self.name,
            'description': self.description,
            'author': self.author,
            'placeholders': placeholders,
            'dependencies': dict(self.dependencies),
            'devDependencies': dict(self.dev_dependencies),
        })


@dataclass(frozen=True)
class ProcessingOptions:
    """
    Per-invocation request.

    Booleans default to None so that a caller who forgot to decide is
    rejected by option validation instead of silently getting a default.
    """

    entity: Optional[str] = None
    remove_comments: Optional[bool] = None
    validator_type: Optional[str] = NO_VALIDATOR
    separate_types: Optional[bool] = None

    @property
    def uses_validator(self) -> bool:
        return bool(self.validator_type) and self.validator_type != NO_VALIDATOR


# =============================================================================
# Validation functions
# =============================================================================

def validate_template_config_data(data: Any) -> ValidationResult:
    """Validate the JSON representation of a template config."""
    if not isinstance(data, Mapping):
        return ValidationResult.failed(["Template configuration must be an object"])

    errors: List[str] = []

    filename = data.get('filename')
    if not isinstance(filename, str) or not filename.strip():
        errors.append("Filename is required")

    for key in ('name', 'author', 'description', 'version', 'outputExtension', 'typesFileOutputExtension'):
        _check_optional_string(data, key, errors)

    _check_optional_string_list(data, 'tags', errors)
    _check_optional_string_list(data, 'validatorSupport', errors)
    _check_optional_string_mapping(data, 'dependencies', errors)
    _check_optional_string_mapping(data, 'devDependencies', errors)

    placeholders = data.get('placeholders')
    if placeholders is not None:
        if not isinstance(placeholders, (Mapping, list)):
            errors.append("'placeholders' must be an object or a list of objects")
        elif isinstance(placeholders, list) and not all(isinstance(entry, Mapping) for entry in placeholders):
            errors.append("Every entry of 'placeholders' must be an object")
        else:
            for name, spec in _iter_placeholder_entries(placeholders):
                _check_placeholder_entry(name, spec, TEMPLATE_PLACEHOLDER_NAME, errors, allow_value=False)

    return ValidationResult.from_errors(errors)


def validate_validator_config_data(data: Any) -> ValidationResult:
    """Validate the JSON representation of a validator config."""
    if not isinstance(data, Mapping):
        return ValidationResult.failed(["Validator configuration must be an object"])

    errors: List[str] = []

    if 'name' in data and (not isinstance(data['name'], str) or not data['name']):
        errors.append("Validator name is required")
    if 'description' in data and (not isinstance(data['description'], str) or not data['description']):
        errors.append("Validator description is required")
    if 'author' in data and (not isinstance(data['author'], str) or not data['author']):
        errors.append("Author name is required")

    _check_optional_string_mapping(data, 'dependencies', errors)
    _check_optional_string_mapping(data, 'devDependencies', errors)

    placeholders = data.get('placeholders')
    if placeholders is not None:
        if not isinstance(placeholders, Mapping):
            errors.append("'placeholders' must be an object")
        else:
            for name, spec in placeholders.items():
                _check_placeholder_entry(name, spec, VALIDATOR_PLACEHOLDER_NAME, errors, allow_value=True)

    return ValidationResult.from_errors(errors)


def validate_template_config(config: TemplateConfig) -> ValidationResult:
    """Validate an already built TemplateConfig."""
    if not isinstance(config, TemplateConfig):
        return ValidationResult.failed(["Expected a TemplateConfig"])
    return validate_template_config_data(config.to_dict())


def validate_validator_config(config: ValidatorConfig) -> ValidationResult:
    """Validate an already built ValidatorConfig."""
    if not isinstance(config, ValidatorConfig):
        return ValidationResult.failed(["Expected a ValidatorConfig"])
    return validate_validator_config_data(config.to_dict())


def validate_processing_options(options: Any) -> ValidationResult:
    """Validate ProcessingOptions, collecting every violated constraint."""
    if not isinstance(options, ProcessingOptions):
        return ValidationResult.failed(["Options must be a ProcessingOptions instance"])

    errors: List[str] = []

    entity_check = validate_entity_name(options.entity)
    if entity_check is not True:
        errors.append(entity_check if isinstance(entity_check, str) else "Invalid entity name")

    if not isinstance(options.remove_comments, bool):
        errors.append("You must define whether you want to remove comments or not")

    if not isinstance(options.validator_type, str) or not options.validator_type.strip():
        errors.append(f"Validator type is required (use '{NO_VALIDATOR}' to disable validators)")

    if not isinstance(options.separate_types, bool):
        errors.append("You must specify if you want to store the types in a separate file")

    return ValidationResult.from_errors(errors)


# =============================================================================
# Helpers
# =============================================================================

def _iter_placeholder_entries(placeholders: Any) -> Iterator[Tuple[str, Any]]:
    """
    Iterate placeholder declarations in order.

    Accepts a mapping, or a list of single-key mappings
    (``[{"entity": {...}}, {"Entity": {...}}]``).
    """
    if not placeholders:
        return
    if isinstance(placeholders, Mapping):
        yield from placeholders.items()
        return
    for entry in placeholders:
        if isinstance(entry, Mapping):
            yield from entry.items()


def _check_placeholder_entry(name: Any, spec: Any, pattern, errors: List[str], allow_value: bool) -> None:
    if not isinstance(name, str) or not pattern.match(name):
        errors.append(f"Invalid placeholder name: {name!r}")
        return
    if not isinstance(spec, Mapping):
        errors.append(f"Placeholder '{name}' must be an object")
        return
    description = spec.get('description')
    if description is not None and not isinstance(description, str):
        errors.append(f"Placeholder '{name}': description must be a string")
    if 'required' in spec and not isinstance(spec['required'], bool):
        errors.append(f"Placeholder '{name}': required must be a boolean")
    if allow_value and 'value' in spec:
        value = spec['value']
        is_lines = isinstance(value, (list, tuple)) and all(isinstance(line, str) for line in value)
        if value is not None and not isinstance(value, str) and not is_lines:
            errors.append(f"Placeholder '{name}': value must be a string or a list of strings")


def _check_optional_string(data: Mapping, key: str, errors: List[str]) -> None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        errors.append(f"'{key}' must be a string")


def _check_optional_string_list(data: Mapping, key: str, errors: List[str]) -> None:
    value = data.get(key)
    if value is None:
        return
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        errors.append(f"'{key}' must be a list of strings")


def _check_optional_string_mapping(data: Mapping, key: str, errors: List[str]) -> None:
    value = data.get(key)
    if value is None:
        return
    if not isinstance(value, Mapping) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        errors.append(f"'{key}' must map package names to version strings")


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def _validator_label(name: Optional[str]) -> str:
    return f"{name} validator" if name else "Validator"


__all__ = [
    'NO_VALIDATOR',
    'DEFAULT_VALIDATOR',
    'ValidationResult',
    'TemplateConfig',
    'ValidatorConfig',
    'ProcessingOptions',
    'validate_entity_name',
    'validate_template_config_data',
    'validate_validator_config_data',
    'validate_template_config',
    'validate_validator_config',
    'validate_processing_options',
]
