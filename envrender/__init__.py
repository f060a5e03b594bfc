"""Render text templates from .env files and the process environment."""

from envrender.exceptions import (
    EnvRenderError,
    OutputWriteError,
    RenderError,
    RenderSyntaxError,
    SourceIOError,
    SourceParseError,
    UndefinedVariableError,
)
from envrender.rendering import render, render_to
from envrender.variables import BindingSet, ResolutionMode, resolve

__version__ = "0.1.0"

__all__ = [
    'BindingSet',
    'EnvRenderError',
    'OutputWriteError',
    'RenderError',
    'RenderSyntaxError',
    'ResolutionMode',
    'SourceIOError',
    'SourceParseError',
    'UndefinedVariableError',
    'render',
    'render_to',
    'resolve',
]
