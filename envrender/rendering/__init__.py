"""
Template rendering module.
Strict Jinja2 rendering of a template against a binding set.
"""

from .renderer import read_template, render, render_to

__all__ = ['read_template', 'render', 'render_to']
