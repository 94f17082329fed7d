"""
TEMPLATER CLI - List Command

Shows the templates available in the templates store.
"""

import logging

import click

from templater.errors import ConfigurationError

logger = logging.getLogger(__name__)


@click.command(name='list')
@click.pass_obj
def list_templates(obj):
    """
    List available templates with their extensions and validators.

    Examples:
        templater list
        templater --templates-dir ./templates list
    """
    store = obj['store']
    names = store.list_templates()

    if not names:
        click.secho(f"[INFO] No templates found in {store.templates_dir}", fg='yellow')
        click.secho("Create one with 'templater add-template'.", fg='yellow')
        return

    click.secho(f"\nTemplates in {store.templates_dir}:\n", fg='blue', bold=True)

    for name in names:
        try:
            config = store.load_template_config(name)
        except ConfigurationError as e:
            logger.warning(f"Skipping template '{name}': {e.message}")
            continue

        click.secho(f"  {name}", fg='green', bold=True, nl=False)
        if config.name != name:
            click.secho(f" ({config.name})", fg='cyan', nl=False)
        click.echo()

        if config.description:
            click.secho(f"    {config.description}", fg='white')

        extensions = config.output_extension or '-'
        if config.has_types_file:
            extensions += f", types: {config.types_file_output_extension}"
        click.secho("    Extensions: ", fg='blue', nl=False)
        click.secho(extensions, fg='cyan')

        validators = store.list_validators(name)
        click.secho("    Validators: ", fg='blue', nl=False)
        click.secho(', '.join(validators) or 'none', fg='magenta')

    click.echo()
