"""
TEMPLATER - Template-driven source generation

Turns a named template, an entity name and a validator profile into
ready-to-write source text.

Quick Start:
    from templater import TemplateProcessor, TemplateStore, ProcessingOptions

    processor = TemplateProcessor(TemplateStore())
    processor.register_from_store("hono")

    result = processor.process_template("hono", ProcessingOptions(
        entity="blog post",
        remove_comments=False,
        validator_type="zod",
        separate_types=True,
    ))
    print(result.main_file_content)
    print(result.types_file_content)

Full Import Guide:
    # Pipeline
    from templater import TemplateProcessor, ProcessingOptions, ProcessedTemplate

    # Config records
    from templater import TemplateConfig, ValidatorConfig

    # Storage
    from templater.store import TemplateStore

    # Errors
    from templater.errors import TemplaterError, TemplateNotFound, OptionsInvalid

    # Logging
    from templater.logging import get_logger
"""

__version__ = "0.1.0"


from templater.config import Config
from templater.core.naming import derive_name_forms
from templater.core.schemas import ProcessingOptions, TemplateConfig, ValidatorConfig
from templater.core.processor import ProcessedTemplate, TemplateProcessor
from templater.store import TemplateStore
from templater.errors import TemplaterError

__all__ = [
    # Pipeline
    "TemplateProcessor",
    "ProcessingOptions",
    "ProcessedTemplate",
    # Config records
    "TemplateConfig",
    "ValidatorConfig",
    # Storage
    "TemplateStore",
    # Helpers
    "derive_name_forms",
    "Config",
    "TemplaterError",
    # Version
    "__version__",
]
