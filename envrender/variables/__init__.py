"""
Variable resolution module.
Builds the binding set a template is rendered against.
"""

from .resolver import DEFAULT_FILENAME, load_source, resolve
from .types import BindingSet, ResolutionMode

__all__ = ['BindingSet', 'DEFAULT_FILENAME', 'ResolutionMode', 'load_source', 'resolve']
