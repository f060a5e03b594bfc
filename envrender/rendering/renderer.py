"""
Template rendering implementation.

Templates use Jinja2 syntax ({{NAME}}, {% if %}, filters). Strictness is
chosen per call: strict rendering turns any reference to an unbound name
into UndefinedVariableError, lenient rendering substitutes empty text.
"""

import functools
import logging
from pathlib import Path
from typing import Mapping, TextIO, Union

from jinja2 import Environment, StrictUndefined, TemplateError, TemplateSyntaxError, Undefined, UndefinedError
from jinja2.utils import missing

from envrender.exceptions import (
    OutputWriteError,
    RenderError,
    RenderSyntaxError,
    SourceIOError,
    UndefinedVariableError,
)


logger = logging.getLogger(__name__)


class BindingUndefined(StrictUndefined):
    """StrictUndefined that reports unbound top-level names by name."""

    __slots__ = ()

    def __init__(self, hint=None, obj=missing, name=None, exc=UndefinedError):
        # obj is only missing for plain name lookups, not attribute access
        if hint is None and obj is missing and name is not None:
            exc = functools.partial(UndefinedVariableError, name)
        super().__init__(hint, obj, name, exc)


@functools.lru_cache(maxsize=None)
def _environment(strict: bool) -> Environment:
    """Build a Jinja2 environment for plain-text templates."""
    return Environment(
        autoescape=False,
        undefined=BindingUndefined if strict else Undefined,
        keep_trailing_newline=True,
    )


def render(template_text: str, bindings: Mapping[str, str], strict: bool = True) -> str:
    """
    Render template text against a binding set.

    Args:
        template_text: Raw template source
        bindings: Variable name to value mapping (a BindingSet or any Mapping)
        strict: Fail on references to unbound names instead of emitting ''

    Returns:
        Rendered text

    Raises:
        UndefinedVariableError: Strict mode and a referenced name is unbound
        RenderSyntaxError: Template text is malformed
        RenderError: Any other evaluation failure
    """
    env = _environment(strict)
    try:
        template = env.from_string(template_text)
    except TemplateSyntaxError as e:
        raise RenderSyntaxError(e.message or str(e), e.lineno)

    try:
        return template.render(dict(bindings))
    except UndefinedVariableError:
        raise
    except UndefinedError as e:
        raise RenderError(str(e))
    except TemplateError as e:
        raise RenderError(f"Template error: {e}")
    except Exception as e:
        raise RenderError(f"Template error: {type(e).__name__}: {e}")


def render_to(
    template_text: str,
    bindings: Mapping[str, str],
    out: TextIO,
    strict: bool = True
) -> None:
    """
    Render and write the result to a text stream.

    The whole result is rendered before anything is written, so a failing
    render leaves the stream untouched.
    """
    rendered = render(template_text, bindings, strict=strict)
    try:
        out.write(rendered)
        out.flush()
    except OSError as e:
        raise OutputWriteError(getattr(out, 'name', '<stream>'), e.strerror or str(e))
    logger.debug(f"Wrote {len(rendered)} character(s)")


def read_template(path: Union[str, Path]) -> str:
    """Read a template file fully into memory."""
    template_path = Path(path)
    try:
        return template_path.read_text(encoding='utf-8')
    except FileNotFoundError:
        raise SourceIOError(template_path, "No such file or directory")
    except UnicodeDecodeError as e:
        raise SourceIOError(template_path, f"not valid UTF-8 ({e.reason})")
    except OSError as e:
        raise SourceIOError(template_path, e.strerror or str(e))
