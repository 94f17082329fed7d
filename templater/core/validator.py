"""
TEMPLATER Validator Processor

Injects a validator profile into template text. A processor lives for one
``process_template`` call:

    construct (config validated, every placeholder tracked as not found)
      -> process_validator() on each text (found placeholders untracked,
         tokens substituted)
      -> alert_or_throw_for_missing_placeholders()
"""

import logging
from typing import Any, Dict, List, Mapping, Union

from templater.core.placeholders import token
from templater.core.schemas import ValidatorConfig, validate_validator_config
from templater.errors import MissingRequiredPlaceholder, ValidatorConfigInvalid

logger = logging.getLogger(__name__)


class ValidatorProcessor:
    """
    Substitutes a validator's placeholders and checks the template
    references the ones it requires.

    Usage:
        processor = ValidatorProcessor(zod_config)
        main = processor.process_validator(main, 'main')
        types = processor.process_validator(types, 'types')
        processor.alert_or_throw_for_missing_placeholders()
    """

    def __init__(self, config: Union[ValidatorConfig, Mapping[str, Any]]):
        if not isinstance(config, ValidatorConfig):
            config = ValidatorConfig.from_dict(config)

        result = validate_validator_config(config)
        if not result:
            label = f"{config.name} validator" if config.name else "Validator"
            raise ValidatorConfigInvalid(f"{label} configs are not valid:\n{result.numbered()}")

        self.config = config
        self.not_found_placeholders: Dict[str, bool] = {
            name: placeholder.required for name, placeholder in config.placeholders.items()
        }

    @property
    def name(self) -> str:
        return self.config.name or 'unnamed'

    def _check_placeholders_exist_in_template(self, template: str) -> None:
        for name in self.config.placeholders:
            if token(name) in template:
                self.not_found_placeholders.pop(name, None)

    def process_validator(self, template: str, instance: str = 'main') -> str:
        """
        Replace the validator's placeholders in ``template``.

        Args:
            template: Raw template text
            instance: Label of the text being processed, for logging

        Returns:
            The template with every declared placeholder substituted
        """
        self._check_placeholders_exist_in_template(template)

        if template.startswith('\n'):
            template = template[1:]

        for name, placeholder in self.config.placeholders.items():
            template = template.replace(token(name), placeholder.render())

        logger.debug(f"Applied '{self.name}' validator to {instance} template")
        return template

    def missing_placeholders(self, required: bool) -> List[str]:
        return [name for name, is_required in self.not_found_placeholders.items() if is_required == required]

    def alert_or_throw_for_missing_placeholders(self) -> None:
        """
        Warn about unused optional placeholders and fail on missing required ones.

        Raises:
            MissingRequiredPlaceholder: If any required placeholder never appeared
        """
        if not self.not_found_placeholders:
            return

        for name in self.missing_placeholders(required=False):
            logger.warning(f"Validator's placeholder {token(name)} missing but not required")

        missing_required = self.missing_placeholders(required=True)
        if missing_required:
            raise MissingRequiredPlaceholder(missing_required, validator_name=self.config.name)


__all__ = ['ValidatorProcessor']
