"""
Private Jinja2 Template Loader for TEMPLATER CLI

Jinja2 environment used by ``templater add-template`` to render the
scaffolding of a new template. Scaffolds must emit literal ``{{name}}``
placeholder tokens, so they call the ``token`` global instead of writing
double braces.

IMPORTANT: This is a private module (prefixed with underscore) and should
only be imported internally by TEMPLATER CLI commands.
"""

from pathlib import Path
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from templater.core.placeholders import token

SCAFFOLDS_DIR = Path(__file__).parent / "templates"

jinja_env = Environment(
    loader=FileSystemLoader(str(SCAFFOLDS_DIR)),
    autoescape=select_autoescape(),
    auto_reload=False,
    undefined=StrictUndefined,  # Fail loudly on undefined variables
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

# Expose only what the scaffolds need
jinja_env.globals.update({
    'token': token,
    'len': len,
})

__all__ = ['jinja_env', 'SCAFFOLDS_DIR']
