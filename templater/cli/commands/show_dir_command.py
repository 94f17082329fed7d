"""
TEMPLATER CLI - Show Templates Directory Command
"""

import click


@click.command(name='show-dir')
@click.pass_obj
def show_dir(obj):
    """
    Print the templates directory.

    Examples:
        templater show-dir
        cd "$(templater show-dir)"
    """
    click.echo(str(obj['store'].templates_dir.resolve()))
