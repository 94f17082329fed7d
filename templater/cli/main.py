"""
TEMPLATER CLI Commands

Interactive CLI for generating code from templates and managing the
templates store.
"""

import click

from templater.cli.commands.insert_command import insert
from templater.cli.commands.add_template_command import add_template
from templater.cli.commands.list_command import list_templates
from templater.cli.commands.show_dir_command import show_dir
from templater.cli.utils import load_settings
from templater.config import VALID_LOG_LEVELS
from templater.logging import setup_logging
from templater.store import TemplateStore


def _version_callback(ctx, param, value):
    """Display version and exit."""
    if value:
        from templater import __version__
        click.echo(f'TEMPLATER CLI v{__version__}')
        ctx.exit()


@click.group()
@click.option('--version', '-V', is_flag=True, callback=_version_callback, expose_value=False, is_eager=True,
              help='Show version and exit')
@click.option('--templates-dir', envvar='TEMPLATER_TEMPLATES_DIR', default=None,
              type=click.Path(file_okay=False),
              help='Templates directory (default: the built-in templates)')
@click.option('--log-level', default=None,
              type=click.Choice(sorted(VALID_LOG_LEVELS), case_sensitive=False),
              help='Logging level (default: WARNING)')
@click.pass_context
def cli(ctx, templates_dir, log_level):
    """
    TEMPLATER CLI - Generate code from templates

    Turns a template, an entity name and a validator into ready-to-use
    source files.
    """
    settings = load_settings()
    setup_logging(log_level or settings.LOG_LEVEL)

    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings
    ctx.obj['store'] = TemplateStore(templates_dir or settings.TEMPLATES_DIR)


# Register all commands
cli.add_command(insert)
cli.add_command(insert, name='generate')
cli.add_command(add_template)
cli.add_command(list_templates)
cli.add_command(show_dir)


if __name__ == '__main__':
    cli()
