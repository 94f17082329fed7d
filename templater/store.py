"""
TEMPLATER Template Store

Discovers templates and reads their raw text and configuration through a
Jinja2 loader. A FileSystemLoader over the templates directory is used by
default; any other loader (e.g. DictLoader in tests) can be injected.

Templates are never rendered by Jinja2 here: the loader is only used to
locate and read sources, so ``{{placeholder}}`` tokens reach the template
processor untouched.

Layout:
    <name>/<name>.config.json
    <name>/<filename>.tpl
    <name>/<filename>.types.tpl
    <name>/<filename>.types.fallback.tpl
    <name>/validators/<validator>.config.json
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, List, Optional, Union

import jinja2

from templater.config import Config
from templater.core.schemas import TemplateConfig, ValidatorConfig
from templater.errors import (
    TemplateConfigInvalid,
    TemplateNotFound,
    ValidatorConfigInvalid,
    ValidatorNotFound,
)

logger = logging.getLogger(__name__)

_RESOURCE_NAME = re.compile(r'^[a-zA-Z0-9_-]+$')

LIST_TEMPLATES_TIP = "Run 'templater list' to see the available templates."


class TemplateStore:
    """
    Read-only access to a directory of templates.

    Usage:
        store = TemplateStore("./templates")
        config = store.load_template_config("hono")
        text = store.load_template("hono", config)
    """

    def __init__(self, templates_dir: Union[str, Path, None] = None, loader: jinja2.BaseLoader = None):
        if loader is None:
            templates_dir = templates_dir or Config.TEMPLATES_DIR
            loader = jinja2.FileSystemLoader(str(templates_dir))

        self.templates_dir = Path(templates_dir) if templates_dir else None
        self.env = jinja2.Environment(
            loader=loader,
            autoescape=False,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def _source_names(self) -> List[str]:
        try:
            return self.env.list_templates()
        except TypeError:
            # Loader does not support listing
            return []

    def list_templates(self) -> List[str]:
        """Names of all templates that ship a config file, sorted."""
        names = set()
        for source_name in self._source_names():
            parts = source_name.split('/')
            if len(parts) == 2 and parts[1] == f"{parts[0]}{Config.Internal.CONFIG_SUFFIX}":
                names.add(parts[0])
        return sorted(names)

    def list_validators(self, template_name: str) -> List[str]:
        """Names of the validators available for a template, sorted."""
        prefix = f"{template_name}/{Config.Internal.VALIDATORS_DIR_NAME}/"
        suffix = Config.Internal.CONFIG_SUFFIX
        names = []
        for source_name in self._source_names():
            if source_name.startswith(prefix) and source_name.endswith(suffix):
                validator_name = source_name[len(prefix):-len(suffix)]
                if '/' not in validator_name and validator_name:
                    names.append(validator_name)
        return sorted(names)

    def has_template(self, template_name: str) -> bool:
        return template_name in self.list_templates()

    def has_validator(self, template_name: str, validator_name: str) -> bool:
        return validator_name in self.list_validators(template_name)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _read(self, source_name: str) -> str:
        source, _filename, _uptodate = self.env.loader.get_source(self.env, source_name)
        return source

    def _read_json(self, source_name: str) -> Any:
        return json.loads(self._read(source_name))

    @staticmethod
    def _check_name(name: str, kind: str, error_cls) -> None:
        if not isinstance(name, str) or not _RESOURCE_NAME.match(name):
            raise error_cls(
                f"Invalid {kind} name: {name!r}",
                suggestion=f"{kind.capitalize()} names may only contain letters, numbers, dashes and underscores.",
            )

    def load_template_config(self, template_name: str) -> TemplateConfig:
        """
        Load and validate a template's configuration.

        Raises:
            TemplateNotFound: If the template does not exist
            TemplateConfigInvalid: If the config is not valid JSON or violates the schema
        """
        self._check_name(template_name, 'template', TemplateNotFound)
        source_name = f"{template_name}/{template_name}{Config.Internal.CONFIG_SUFFIX}"

        try:
            data = self._read_json(source_name)
        except jinja2.TemplateNotFound:
            raise TemplateNotFound(f"Template '{template_name}' not found", suggestion=LIST_TEMPLATES_TIP)
        except json.JSONDecodeError as e:
            raise TemplateConfigInvalid(f"Template '{template_name}' configuration is not valid JSON: {e}")

        return TemplateConfig.from_dict(data, source=template_name)

    def load_validator_config(self, template_name: str, validator_name: str) -> ValidatorConfig:
        """
        Load and validate a validator's configuration for a template.

        Raises:
            ValidatorNotFound: If the validator does not exist for this template
            ValidatorConfigInvalid: If the config is not valid JSON or violates the schema
        """
        self._check_name(template_name, 'template', TemplateNotFound)
        self._check_name(validator_name, 'validator', ValidatorNotFound)
        source_name = (
            f"{template_name}/{Config.Internal.VALIDATORS_DIR_NAME}/"
            f"{validator_name}{Config.Internal.CONFIG_SUFFIX}"
        )

        try:
            data = self._read_json(source_name)
        except jinja2.TemplateNotFound:
            raise ValidatorNotFound(
                f"Validator '{validator_name}' not found for template '{template_name}'",
                suggestion=f"Available validators: {', '.join(self.list_validators(template_name)) or 'none'}",
            )
        except json.JSONDecodeError as e:
            raise ValidatorConfigInvalid(f"{validator_name} validator configs are not valid JSON: {e}")

        return ValidatorConfig.from_dict(data, source=validator_name)

    def load_template(self, template_name: str, config: TemplateConfig) -> str:
        """
        Read a template's raw main text.

        Raises:
            TemplateNotFound: If the template file does not exist
        """
        source_name = f"{template_name}/{config.filename}{Config.Internal.TEMPLATE_SUFFIX}"
        try:
            return self._read(source_name)
        except jinja2.TemplateNotFound:
            raise TemplateNotFound(
                f"Template file '{source_name}' not found",
                suggestion="Check the 'filename' entry of the template configuration.",
            )

    def load_types_template(self, template_name: str, config: TemplateConfig, fallback: bool = False) -> Optional[str]:
        """
        Read a template's raw types text.

        Args:
            template_name: Template directory name
            config: The template's configuration
            fallback: Read the fallback types text used when no validator is active

        Returns:
            The types text; None when a fallback was requested and none exists

        Raises:
            TemplateNotFound: If the (non-fallback) types file does not exist
        """
        suffix = (
            Config.Internal.FALLBACK_TYPES_TEMPLATE_SUFFIX if fallback
            else Config.Internal.TYPES_TEMPLATE_SUFFIX
        )
        source_name = f"{template_name}/{config.filename}{suffix}"
        try:
            return self._read(source_name)
        except jinja2.TemplateNotFound:
            if fallback:
                return None
            raise TemplateNotFound(
                f"Types template file '{source_name}' not found",
                suggestion="Add the types file or remove 'typesFileOutputExtension' from the template configuration.",
            )


__all__ = ['TemplateStore']
