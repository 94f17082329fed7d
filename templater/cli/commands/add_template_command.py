"""
TEMPLATER CLI - Add Template Command

Scaffolds a new template directory in the templates store.
"""

import json
import logging
import shutil
import sys
from pathlib import Path

import click
import questionary

from templater.config import Config
from templater.core.schemas import TemplateConfig, ValidatorConfig
from templater.errors import TemplaterError
from .._template_loader import jinja_env
from ..utils import CLIError, handle_error, next_steps, progress_step, section_header, success_message
from .helpers import (
    ask,
    custom_style,
    parse_dependencies,
    parse_list,
    validate_extension,
    validate_not_empty,
    validate_template_filename,
)

logger = logging.getLogger(__name__)


@click.command(name='add-template')
@click.option('--name', '-n', default=None,
              help='Descriptive name of the template')
@click.option('--filename', '-f', default=None,
              help='Filename (and directory name) of the template')
@click.option('--description', '-d', default=None,
              help='Description of the template')
@click.option('--output-extension', default=None,
              help='Extension of the generated main file (e.g. ts, js, md)')
@click.option('--types-file-output-extension', default=None,
              help="Extension of the generated types file; empty for no types file")
@click.option('--required', default=None,
              help='Comma-separated required placeholders (e.g. "entity, Entity")')
@click.option('--optional', default=None,
              help='Comma-separated optional placeholders (e.g. "imports, types")')
@click.option('--validators', default=None,
              help='Comma-separated supported validators (e.g. "zod, yup")')
@click.option('--dependencies', default=None,
              help='Comma-separated dependencies (e.g. "hono@^4.6.0")')
@click.option('--dev-dependencies', default=None,
              help='Comma-separated devDependencies (e.g. "typescript@^5.0.0")')
@click.option('--force', is_flag=True, default=False,
              help='Replace an existing template with the same filename')
@click.pass_obj
def add_template(obj, name, filename, description, output_extension, types_file_output_extension,
                 required, optional, validators, dependencies, dev_dependencies, force):
    """
    Create a new template.

    Writes <filename>/<filename>.config.json, a sample <filename>.tpl listing
    the placeholders, a <filename>.types.tpl when a types extension is given,
    and an empty config for every supported validator.

    Examples:
        templater add-template
        templater add-template --name "Express router" --filename express --output-extension ts
    """
    store = obj['store']

    section_header("Add Template")

    try:
        _check_option_values(filename, output_extension, types_file_output_extension)

        if name is None:
            name = ask(questionary.text(
                "Enter the template descriptive name:",
                validate=lambda text: validate_not_empty(text, "Template name"),
                style=custom_style,
            ))
        if filename is None:
            filename = ask(questionary.text(
                "Enter the generated template filename:",
                validate=validate_template_filename,
                style=custom_style,
            ))
        if description is None:
            description = ask(questionary.text(
                "Enter the template description (or pass empty):",
                style=custom_style,
            ))

        name, filename, description = name.strip(), filename.strip(), description.strip()

        template_dir = Path(store.templates_dir) / filename
        if template_dir.exists():
            replace = force or ask(questionary.confirm(
                f'Template "{filename}" already exists. Overwrite?',
                default=False,
                style=custom_style,
            ))
            if not replace:
                click.secho("\n[CANCELLED] Operation cancelled.\n", fg='yellow')
                return

        if output_extension is None:
            output_extension = ask(questionary.text(
                'Enter the output file extension (e.g.: "ts", "js", "md", "html"):',
                validate=validate_extension,
                style=custom_style,
            ))
        if types_file_output_extension is None:
            types_file_output_extension = ask(questionary.text(
                'Enter the types file extension (e.g.: "ts", "d.ts"), or pass empty for no types file:',
                default='ts',
                validate=lambda text: validate_extension(text, allow_empty=True),
                style=custom_style,
            ))
        if required is None:
            required = ask(questionary.text(
                'Enter required placeholders (comma-separated), or pass empty:',
                default='entity, Entity, entities',
                style=custom_style,
            ))
        if optional is None:
            optional = ask(questionary.text(
                'Enter optional placeholders (comma-separated, e.g.: "imports, types"), or pass empty:',
                style=custom_style,
            ))
        if validators is None:
            validators = ask(questionary.text(
                'Enter supported validators (comma-separated, e.g.: "zod, yup"), or pass empty:',
                style=custom_style,
            ))
        if dependencies is None:
            dependencies = ask(questionary.text(
                'Enter recommended dependencies (comma-separated, e.g.: "hono@^4.6.0"), or pass empty:',
                style=custom_style,
            ))
        if dev_dependencies is None:
            dev_dependencies = ask(questionary.text(
                'Enter recommended devDependencies (comma-separated, e.g.: "typescript@^5.0.0"), or pass empty:',
                style=custom_style,
            ))

        required_keys = parse_list(required)
        optional_keys = [key for key in parse_list(optional) if key not in required_keys]
        validator_names = parse_list(validators)
        for validator_name in validator_names:
            if validate_template_filename(validator_name) is not True:
                raise CLIError(
                    f"Invalid validator name: {validator_name!r}",
                    suggestion="Validator names may only contain letters, numbers, underscores and dashes.",
                    error_code="E006",
                )

        template_dependencies = _parse_dependencies_or_warn(dependencies)
        template_dev_dependencies = _parse_dependencies_or_warn(dev_dependencies)

        placeholders = {key: {'description': '', 'required': True} for key in required_keys}
        placeholders.update({key: {'description': '', 'required': False} for key in optional_keys})

        # Validated before anything touches the disk
        config = TemplateConfig.from_dict({
            'name': name,
            'description': description or None,
            'filename': filename,
            'version': '1.0.0',
            'validatorSupport': validator_names,
            'outputExtension': output_extension.strip().lstrip('.'),
            'typesFileOutputExtension': types_file_output_extension.strip().lstrip('.'),
            'placeholders': placeholders,
            'dependencies': template_dependencies,
            'devDependencies': template_dev_dependencies,
        }, source=filename)

        if template_dir.exists():
            shutil.rmtree(template_dir)

        _write_template(template_dir, config, required_keys, optional_keys, validator_names)

        success_message("Template created successfully!", details={
            'Location': template_dir.resolve(),
            'Validators': ', '.join(validator_names) or 'none',
        })
        next_steps([
            f"Edit {template_dir / (filename + Config.Internal.TEMPLATE_SUFFIX)}",
            f"Fill the validator configs in {template_dir / Config.Internal.VALIDATORS_DIR_NAME}"
            if validator_names else "Add validators under the template's validators directory",
            f"templater insert --template {filename}",
        ])

    except (TemplaterError, PermissionError) as e:
        handle_error(e)
        sys.exit(1)


def _check_option_values(filename, output_extension, types_file_output_extension) -> None:
    errors = []

    if filename is not None:
        check = validate_template_filename(filename)
        if check is not True:
            errors.append(check)
    if output_extension is not None:
        check = validate_extension(output_extension)
        if check is not True:
            errors.append(check)
    if types_file_output_extension is not None:
        check = validate_extension(types_file_output_extension, allow_empty=True)
        if check is not True:
            errors.append(f"Types file: {check}")

    if errors:
        raise CLIError(
            "Invalid options:\n" + "\n".join(f"{index}- {error}" for index, error in enumerate(errors, 1)),
            suggestion="Provide valid values or omit the options to be prompted.",
            error_code="E006",
        )


def _parse_dependencies_or_warn(text: str) -> dict:
    parsed, invalid = parse_dependencies(text)
    for entry in invalid:
        logger.warning(f"Invalid dependency: {entry}, skipping. Manually add it to the template later.")
    return parsed


def _write_template(template_dir: Path, config: TemplateConfig, required_keys, optional_keys, validator_names) -> None:
    filename = config.filename
    internal = Config.Internal

    with progress_step("Creating template directory"):
        template_dir.mkdir(parents=True, exist_ok=True)

    with progress_step(f"Writing {filename}{internal.CONFIG_SUFFIX}"):
        (template_dir / f"{filename}{internal.CONFIG_SUFFIX}").write_text(
            json.dumps(config.to_dict(), indent=2) + "\n", encoding='utf-8'
        )

    with progress_step(f"Writing {filename}{internal.TEMPLATE_SUFFIX}"):
        content = jinja_env.get_template('template.tpl.j2').render(
            required=required_keys,
            optional=optional_keys,
            has_types=config.has_types_file,
        )
        (template_dir / f"{filename}{internal.TEMPLATE_SUFFIX}").write_text(content, encoding='utf-8')

    if config.has_types_file:
        with progress_step(f"Writing {filename}{internal.TYPES_TEMPLATE_SUFFIX}"):
            content = jinja_env.get_template('template.types.tpl.j2').render(filename=filename)
            (template_dir / f"{filename}{internal.TYPES_TEMPLATE_SUFFIX}").write_text(content, encoding='utf-8')

    if validator_names:
        validators_dir = template_dir / internal.VALIDATORS_DIR_NAME
        with progress_step("Writing validator configs"):
            validators_dir.mkdir(exist_ok=True)
            for validator_name in validator_names:
                validator = ValidatorConfig(
                    name=validator_name,
                    description=f"{validator_name} validator for {config.name}",
                )
                (validators_dir / f"{validator_name}{internal.CONFIG_SUFFIX}").write_text(
                    json.dumps(validator.to_dict(), indent=2) + "\n", encoding='utf-8'
                )
