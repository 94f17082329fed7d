"""
TEMPLATER CLI - Insert Command

Generates the files of an entity from a template. Every choice can be given
as an option; missing ones are asked interactively.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional

import click
import questionary

from templater.core.naming import format_entity_name
from templater.core.processor import TemplateProcessor
from templater.core.schemas import (
    DEFAULT_VALIDATOR,
    NO_VALIDATOR,
    ProcessingOptions,
    TemplateConfig,
    validate_entity_name,
)
from templater.errors import TemplateNotFound, TemplaterError
from ..utils import (
    CLIError,
    handle_error,
    print_with_headings,
    progress_step,
    section_header,
    success_message,
)
from .helpers import ask, custom_style, validate_directory, validate_not_empty, write_output_file

logger = logging.getLogger(__name__)

CONFLICT_CHOICES = {
    'Overwrite it': 'overwrite',
    'Append to it': 'append',
    'Write to a new numbered file': 'increment',
}


@click.command()
@click.option('--entity', '-e', default=None,
              help='Entity name (letters, numbers, spaces and underscores)')
@click.option('--template', '-t', default=None,
              help='Template to use')
@click.option('--validator', '-v', default=None,
              help="Validator to use ('none' for no validator)")
@click.option('--keep-comments/--remove-comments', default=None,
              help='Keep or remove comments in generated files')
@click.option('--separate-types/--inline-types', default=None,
              help='Write types to a separate file or inline them in the main file')
@click.option('--make-dirs', is_flag=True, default=False,
              help='Create output directories without asking')
@click.option('--entity-dir', default=None,
              help='Directory of the main file')
@click.option('--types-dir', default=None,
              help='Directory of the types file')
@click.option('--types-suffix', default=None,
              help='Suffix of the types filename (required when both files share a directory)')
@click.option('--print', '-p', 'print_output', is_flag=True, default=False,
              help='Print the generated content as well')
@click.option('--overwrite', '-o', is_flag=True, default=False,
              help='Overwrite existing files without asking (takes precedence over --append)')
@click.option('--append', '-a', is_flag=True, default=False,
              help='Append to existing files without asking')
@click.option('--dry-run', is_flag=True, default=False,
              help='Preview generated files without writing them')
@click.pass_obj
def insert(obj, entity, template, validator, keep_comments, separate_types, make_dirs,
           entity_dir, types_dir, types_suffix, print_output, overwrite, append, dry_run):
    """
    Insert boilerplate code generated from a template.

    Examples:
        templater insert
        templater insert -e "blog post" -t hono -v zod
        templater insert -e user -t hono -v none --inline-types --remove-comments --entity-dir ./src --make-dirs
    """
    store = obj['store']
    settings = obj['settings']

    section_header("Insert Boilerplate")

    try:
        # Entity name
        if entity is not None:
            check = validate_entity_name(entity)
            if check is not True:
                raise CLIError(check, suggestion="Use letters, numbers, spaces and underscores only.", error_code="E001")
        else:
            entity = ask(questionary.text(
                "Enter the entity name:",
                default="entity",
                validate=validate_entity_name,
                style=custom_style,
            ))
        entity_name = format_entity_name(entity)

        # Template
        template = _choose_template(store, template)
        config = store.load_template_config(template)

        # Validator
        validator = _choose_validator(config, template, validator)
        validator_type = validator
        if validator == NO_VALIDATOR and store.has_validator(template, DEFAULT_VALIDATOR):
            validator_type = DEFAULT_VALIDATOR
            logger.debug(f"Using the '{DEFAULT_VALIDATOR}' validator of '{template}'")

        # Types
        if not config.has_types_file:
            if separate_types:
                logger.warning(f"Template '{template}' has no types file, --separate-types ignored")
            separate_types = False
        elif separate_types is None:
            separate_types = ask(questionary.confirm(
                "Do you want to generate types in a separate file?",
                default=True,
                style=custom_style,
            ))

        # Output directories
        if entity_dir is None:
            entity_dir = ask(questionary.text(
                "Enter the entity directory:",
                default=settings.ENTITY_DIR,
                validate=validate_directory,
                style=custom_style,
            ))
        if separate_types and types_dir is None:
            types_dir = ask(questionary.text(
                "Enter the directory for your types:",
                default=settings.TYPES_DIR,
                validate=validate_directory,
                style=custom_style,
            ))

        # Comments
        if keep_comments is None:
            keep_comments = ask(questionary.confirm(
                "Do you want to keep comments in generated files?",
                default=False,
                style=custom_style,
            ))

        _print_selections({
            'Entity name': entity_name,
            'Entity output directory': entity_dir,
            'Template': template,
            'Validator': validator_type,
            'Types output directory' if separate_types else 'Types saved in entity file': types_dir or '',
            'Keep comments': 'Yes' if keep_comments else 'No',
        })

        # Generate
        processor = TemplateProcessor(store)
        processor.register_template(template, config)
        if validator_type != NO_VALIDATOR:
            processor.register_validator(validator_type, store.load_validator_config(template, validator_type))

        result = processor.process_template(template, ProcessingOptions(
            entity=entity_name,
            remove_comments=not keep_comments,
            validator_type=validator_type,
            separate_types=separate_types,
        ))

        # Output paths
        main_path = Path(entity_dir) / _output_filename(entity_name, config.output_extension)
        outputs = [('main', main_path, result.main_file_content)]
        if separate_types:
            suffix = _types_suffix(settings, entity_dir, types_dir, types_suffix)
            types_path = Path(types_dir) / _output_filename(
                f"{entity_name}{suffix}", config.types_file_output_extension
            )
            # The types template may exist and still be empty
            outputs.append(('types', types_path, result.types_file_content or ''))

        if dry_run:
            click.secho("\n[DRY-RUN] Preview of changes (no files will be created):", fg='yellow', bold=True)
            click.secho("=" * 50, fg='yellow')
            for label, path, content in outputs:
                click.secho(f"\nWould create {label} file: {path}", fg='cyan')
            print_with_headings([(f"{label} file content", content) for label, _, content in outputs])
            click.secho("\n[TIP] Remove --dry-run flag to create files.", fg='blue')
            click.echo()
            return

        # Write
        for directory in {path.parent for _, path, _ in outputs}:
            _ensure_directory(directory, make_dirs)

        written = {}
        for label, path, content in outputs:
            conflict = _resolve_conflict(path, overwrite, append)
            with progress_step(f"Writing {label} file"):
                written[label] = write_output_file(
                    path,
                    content,
                    overwrite=conflict == 'overwrite',
                    append=conflict == 'append',
                )

        success_message("Boilerplate setup complete!", details={
            f"{label.capitalize()} file": path.resolve() for label, path in written.items()
        })

        _print_dependencies("Dependencies required by the chosen template", processor.templates.values())
        _print_dependencies("Dependencies required by the used validators", processor.validators.values())

        if print_output:
            print_with_headings([(f"{label} file content", content) for label, _, content in outputs])

    except (TemplaterError, FileExistsError, PermissionError) as e:
        handle_error(e)
        sys.exit(1)


def _choose_template(store, template: Optional[str]) -> str:
    names = store.list_templates()
    if not names:
        raise CLIError(
            f"No templates found in {store.templates_dir}",
            suggestion="Create one with 'templater add-template' or pass --templates-dir.",
            error_code="E002",
        )

    if template is not None:
        if template not in names:
            raise TemplateNotFound(
                f'Template "{template}" not found among the existing templates',
                suggestion="Check for typos or create a new template with 'templater add-template'.",
            )
        return template

    return ask(questionary.select(
        "Choose the template to use:",
        choices=names,
        default=names[0],
        style=custom_style,
    ))


def _choose_validator(config: TemplateConfig, template: str, validator: Optional[str]) -> str:
    if validator is not None:
        validator = validator.lower()
        if not config.supports_validator(validator):
            raise CLIError(
                f'The template "{template}" does not support the validator "{validator}"',
                suggestion="Check for typos, add the validator to the template's validatorSupport, "
                           "or use 'none' for no validator.",
                error_code="E003",
            )
        return validator

    choices = [NO_VALIDATOR] + [name for name in config.validator_support if name != NO_VALIDATOR]
    return ask(questionary.select(
        "Choose what type of validation to use:",
        choices=choices,
        default=NO_VALIDATOR,
        style=custom_style,
    ))


def _output_filename(stem: str, extension: Optional[str]) -> str:
    if not extension:
        return stem
    return f"{stem}.{extension.lstrip('.')}"


def _types_suffix(settings, entity_dir: str, types_dir: str, types_suffix: Optional[str]) -> str:
    """Suffix of the types filename; mandatory when both files share a directory."""
    shared_dir = Path(entity_dir).resolve() == Path(types_dir).resolve()
    if not shared_dir:
        return types_suffix or ''

    if types_suffix is None:
        types_suffix = ask(questionary.text(
            "Enter the suffix for your types filename:",
            default=settings.TYPES_FILE_SUFFIX,
            validate=lambda text: validate_not_empty(text, "Suffix"),
            style=custom_style,
        ))
    if not types_suffix.strip():
        raise CLIError(
            "The types file suffix cannot be empty when both files share a directory",
            suggestion=f"Pass --types-suffix (e.g. '{settings.TYPES_FILE_SUFFIX}') or use a different --types-dir.",
            error_code="E004",
        )
    return types_suffix.strip()


def _ensure_directory(directory: Path, make_dirs: bool) -> None:
    if directory.is_dir():
        return

    click.secho(f"[WARNING] Directory \"{directory}\" does not exist.", fg='yellow')
    should_create = make_dirs or ask(questionary.confirm("Create it?", default=True, style=custom_style))
    if not should_create:
        raise CLIError(
            f"Directory \"{directory}\" does not exist",
            suggestion="Create it first or pass --make-dirs.",
            error_code="E005",
        )

    directory.mkdir(parents=True, exist_ok=True)
    click.secho(f"Created directory: {directory}", fg='blue')


def _resolve_conflict(path: Path, overwrite: bool, append: bool) -> str:
    """How to write ``path``: 'overwrite', 'append' or 'increment'."""
    if overwrite:
        return 'overwrite'
    if append:
        return 'append'
    if not path.exists():
        return 'increment'

    click.secho(f"[WARNING] {path} already exists.", fg='yellow')
    answer = ask(questionary.select(
        "What do you want to do?",
        choices=list(CONFLICT_CHOICES),
        default='Write to a new numbered file',
        style=custom_style,
    ))
    return CONFLICT_CHOICES[answer]


def _print_selections(selections: Dict[str, str]) -> None:
    click.secho("\nYour selections:", fg='yellow', bold=True)
    for index, (title, choice) in enumerate(selections.items()):
        color = 'cyan' if index % 2 == 0 else 'magenta'
        if not choice:
            click.secho(f"  - {title}", fg=color)
        else:
            click.secho(f"  - {title}: ", nl=False)
            click.secho(str(choice), fg=color)


def _print_dependencies(title: str, configs) -> None:
    configs = [config for config in configs if config.dependencies or config.dev_dependencies]
    if not configs:
        return

    click.secho(title, fg='cyan', bold=True)
    for config in configs:
        for label, dependencies in (('dependencies', config.dependencies),
                                    ('devDependencies', config.dev_dependencies)):
            if not dependencies:
                continue
            click.secho(f"{config.name} {label}:", fg='blue')
            for name, version in dependencies.items():
                click.echo(f'  "{name}": "{version}"')
    click.echo()
