"""CLI command handlers."""

from .render import render_template_command

__all__ = ['render_template_command']
