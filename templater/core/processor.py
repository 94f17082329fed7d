"""
TEMPLATER Template Processor

Orchestrates the processing pipeline for one template:

    1. pre-process hooks (options validation)
    2. template resolution
    3. types injection
    4. validator injection
    5. entity substitution
    6. post-process hooks

Every stage takes a PipelineState and returns a new one. Nothing about an
in-flight call is stored on the processor, so a processor with populated
registries can serve concurrent calls.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Union

from templater.core.hooks import (
    PostProcessHook,
    PreProcessHook,
    default_post_process_hooks,
    default_pre_process_hooks,
    remove_first_newline,
)
from templater.core.naming import derive_name_forms
from templater.core.placeholders import TYPES_PLACEHOLDER, token
from templater.core.schemas import (
    NO_VALIDATOR,
    ProcessingOptions,
    TemplateConfig,
    ValidatorConfig,
    validate_template_config,
    validate_validator_config,
)
from templater.core.validator import ValidatorProcessor
from templater.errors import (
    TemplateConfigInvalid,
    TemplateNotFound,
    ValidatorConfigInvalid,
    ValidatorNotFound,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineState:
    """Intermediate values of one ``process_template`` call."""

    template_name: str
    options: ProcessingOptions
    config: Optional[TemplateConfig] = None
    main: str = ''
    types: Optional[str] = None


@dataclass(frozen=True)
class ProcessedTemplate:
    """Generated output; ``types_file_content`` is None when no types file applies."""

    main_file_content: str
    types_file_content: Optional[str] = None


class TemplateProcessor:
    """
    Turns a registered template into ready-to-write source text.

    Usage:
        processor = TemplateProcessor(TemplateStore())
        processor.register_from_store("hono")
        result = processor.process_template("hono", ProcessingOptions(
            entity="blog post",
            remove_comments=True,
            validator_type="zod",
            separate_types=False,
        ))
        print(result.main_file_content)
    """

    def __init__(self, store=None):
        if store is None:
            from templater.store import TemplateStore
            store = TemplateStore()

        self.store = store
        self._templates: Dict[str, TemplateConfig] = {}
        self._validators: Dict[str, ValidatorConfig] = {}
        self._pre_process_hooks: List[PreProcessHook] = default_pre_process_hooks()
        self._post_process_hooks: List[PostProcessHook] = default_post_process_hooks()

    # ------------------------------------------------------------------
    # Registries
    # ------------------------------------------------------------------

    def register_template(self, name: str, config: Union[TemplateConfig, Mapping[str, Any]]) -> TemplateConfig:
        """
        Register a template under ``name``.

        Args:
            name: Template name used by ``process_template`` and the store
            config: A TemplateConfig or its raw JSON mapping

        Raises:
            TemplateConfigInvalid: If the config fails validation
        """
        if isinstance(config, TemplateConfig):
            result = validate_template_config(config)
            if not result:
                raise TemplateConfigInvalid(
                    f"Template '{name}' configuration is invalid:\n{result.numbered()}",
                    suggestion="Fix the template configuration and register it again.",
                )
        else:
            config = TemplateConfig.from_dict(config, source=name)

        if name in self._templates:
            logger.warning(f'Template "{name}" already exists and will be overwritten')
        self._templates[name] = config
        return config

    def register_validator(self, name: str, config: Union[ValidatorConfig, Mapping[str, Any]]) -> ValidatorConfig:
        """
        Register a validator profile under ``name``.

        Raises:
            ValidatorConfigInvalid: If the config fails validation
        """
        if isinstance(config, ValidatorConfig):
            result = validate_validator_config(config)
            if not result:
                raise ValidatorConfigInvalid(
                    f"{name} validator configs are not valid:\n{result.numbered()}",
                    suggestion="Fix the validator configuration and register it again.",
                )
        else:
            config = ValidatorConfig.from_dict(config, source=name)

        if name in self._validators:
            logger.warning(f'Validator "{name}" already exists and will be overwritten')
        self._validators[name] = config
        return config

    def register_from_store(self, template_name: str) -> TemplateConfig:
        """
        Register a template and every validator the store has for it.

        Returns:
            The registered template config
        """
        config = self.register_template(template_name, self.store.load_template_config(template_name))
        for validator_name in self.store.list_validators(template_name):
            self.register_validator(
                validator_name,
                self.store.load_validator_config(template_name, validator_name),
            )
        return config

    def register_pre_process_hook(self, hook: PreProcessHook) -> None:
        self._pre_process_hooks.append(hook)

    def register_post_process_hook(self, hook: PostProcessHook) -> None:
        self._post_process_hooks.append(hook)

    @property
    def templates(self) -> Dict[str, TemplateConfig]:
        return dict(self._templates)

    @property
    def validators(self) -> Dict[str, ValidatorConfig]:
        return dict(self._validators)

    def get_available_template_names(self) -> List[str]:
        return list(self._templates)

    def get_available_validator_names(self) -> List[str]:
        return list(self._validators)

    def get_template_config(self, name: str) -> Optional[TemplateConfig]:
        return self._templates.get(name)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def run_pre_process_hooks(self, options: ProcessingOptions) -> None:
        for hook in self._pre_process_hooks:
            hook(options)

    def run_post_process_hooks(self, code: str, options: ProcessingOptions) -> str:
        for hook in self._post_process_hooks:
            code = hook(code, options)
        return code

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def process_template(self, template_name: str, options: ProcessingOptions) -> ProcessedTemplate:
        """
        Process a registered template.

        Args:
            template_name: Name the template was registered under
            options: Per-call processing options

        Returns:
            ProcessedTemplate with the main text and, when a separate types
            file applies, the types text

        Raises:
            OptionsInvalid: If the options fail validation
            TemplateNotFound: If the template is not registered or its text is missing
            ValidatorNotFound: If the selected validator is not registered
            ValidatorConfigInvalid: If the selected validator config is not valid
            MissingRequiredPlaceholder: If the template lacks a placeholder the validator requires
        """
        self.run_pre_process_hooks(options)

        state = PipelineState(template_name=template_name, options=options)
        state = self._resolve_template(state)
        state = self._inject_types(state)
        state = self._inject_validator(state)
        state = self._substitute_entity(state)
        state = self._post_process(state)

        logger.debug(f"Processed template '{template_name}' for entity '{options.entity}'")
        return ProcessedTemplate(main_file_content=state.main, types_file_content=state.types)

    def _resolve_template(self, state: PipelineState) -> PipelineState:
        config = self._templates.get(state.template_name)
        if config is None:
            raise TemplateNotFound(
                f'Template "{state.template_name}" not found',
                suggestion=f"Registered templates: {', '.join(self._templates) or 'none'}",
            )

        main = self.store.load_template(state.template_name, config)

        for name in config.required_placeholders():
            if token(name) not in main:
                logger.warning(
                    f"Template's placeholder {token(name)}, marked as required, "
                    f"was not found in '{state.template_name}'"
                )

        return replace(state, config=config, main=main)

    def _inject_types(self, state: PipelineState) -> PipelineState:
        if not state.config.has_types_file:
            return state

        types_text = None
        if not state.options.uses_validator:
            types_text = self.store.load_types_template(state.template_name, state.config, fallback=True)
        if types_text is None:
            types_text = self.store.load_types_template(state.template_name, state.config)
        types_text = remove_first_newline(types_text)

        if state.options.separate_types:
            return replace(state, types=types_text)
        return replace(state, main=state.main.replace(token(TYPES_PLACEHOLDER), types_text))

    def _inject_validator(self, state: PipelineState) -> PipelineState:
        validator_type = state.options.validator_type
        if validator_type == NO_VALIDATOR:
            return state

        config = self._validators.get(validator_type)
        if config is None:
            raise ValidatorNotFound(
                f'Validator "{validator_type}" not found',
                suggestion=f"Registered validators: {', '.join(self._validators) or 'none'}",
            )

        validator = ValidatorProcessor(config)
        main = validator.process_validator(state.main, 'main')
        types = state.types
        if types:
            types = validator.process_validator(types, 'types')
        validator.alert_or_throw_for_missing_placeholders()

        return replace(state, main=main, types=types)

    def _substitute_entity(self, state: PipelineState) -> PipelineState:
        values = derive_name_forms(state.options.entity).placeholder_values()

        def substitute(text: str) -> str:
            for name, value in values.items():
                text = text.replace(token(name), value)
            return text

        types = substitute(state.types) if state.types else state.types
        return replace(state, main=substitute(state.main), types=types)

    def _post_process(self, state: PipelineState) -> PipelineState:
        main = self.run_post_process_hooks(state.main, state.options)
        types = state.types
        if types is not None:
            types = self.run_post_process_hooks(types, state.options)
        return replace(state, main=main, types=types)


__all__ = ['PipelineState', 'ProcessedTemplate', 'TemplateProcessor']
