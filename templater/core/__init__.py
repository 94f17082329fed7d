"""
TEMPLATER Core

The template-processing pipeline: name derivation, placeholder catalog,
config validation, validator injection and the ordered hook pipeline.
"""

from templater.core.naming import NameForms, derive_name_forms, format_entity_name
from templater.core.placeholders import (
    ENTITY_PLACEHOLDERS,
    FIXED_PLACEHOLDERS,
    TYPES_PLACEHOLDER,
    TemplatePlaceholder,
    ValidatorPlaceholder,
)
from templater.core.schemas import (
    DEFAULT_VALIDATOR,
    NO_VALIDATOR,
    ProcessingOptions,
    TemplateConfig,
    ValidationResult,
    ValidatorConfig,
    validate_entity_name,
)
from templater.core.validator import ValidatorProcessor
from templater.core.processor import PipelineState, ProcessedTemplate, TemplateProcessor

__all__ = [
    'NameForms',
    'derive_name_forms',
    'format_entity_name',
    'ENTITY_PLACEHOLDERS',
    'FIXED_PLACEHOLDERS',
    'TYPES_PLACEHOLDER',
    'TemplatePlaceholder',
    'ValidatorPlaceholder',
    'DEFAULT_VALIDATOR',
    'NO_VALIDATOR',
    'ProcessingOptions',
    'TemplateConfig',
    'ValidationResult',
    'ValidatorConfig',
    'validate_entity_name',
    'ValidatorProcessor',
    'PipelineState',
    'ProcessedTemplate',
    'TemplateProcessor',
]
