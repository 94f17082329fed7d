"""
TEMPLATER CLI Commands
"""

from .insert_command import insert
from .add_template_command import add_template
from .list_command import list_templates
from .show_dir_command import show_dir

__all__ = ['insert', 'add_template', 'list_templates', 'show_dir']
