"""
TEMPLATER CLI

Interactive command line interface for generating code from templates.
"""

from templater.cli.main import cli

__all__ = ['cli']
