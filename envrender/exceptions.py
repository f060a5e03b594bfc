"""envrender exceptions."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union


class EnvRenderError(Exception):
    """Base class for every error surfaced by envrender.

    Each subclass carries the process exit code the CLI maps it to.
    """

    exit_code = 1


class SourceIOError(EnvRenderError):
    """A variables source, template or config file is missing or unreadable."""

    exit_code = 1

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class SourceParseError(EnvRenderError):
    """An environment file violates the KEY=VALUE line grammar."""

    exit_code = 2

    def __init__(self, path: Union[str, Path], line: int, statement: str):
        self.path = Path(path)
        self.line = line
        self.statement = statement
        super().__init__(
            f"Error parsing {self.path} at line {line}: {statement.strip()!r}"
        )


class RenderError(EnvRenderError):
    """The template could not be evaluated against the binding set."""

    exit_code = 2


class UndefinedVariableError(RenderError):
    """Strict rendering hit a reference to a variable with no binding."""

    def __init__(self, name: str, detail: Optional[str] = None):
        self.name = name
        self.detail = detail
        super().__init__(f'Variable "{name}" not found')


class RenderSyntaxError(RenderError):
    """The template text is malformed."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"Template syntax error at line {line}: {message}"
        else:
            message = f"Template syntax error: {message}"
        super().__init__(message)


class OutputWriteError(EnvRenderError):
    """Rendered text could not be written to its destination."""

    exit_code = 1

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot write output to {target}: {reason}")


@dataclass
class ValidationError:
    """Single config validation error."""
    message: str
    path: str = ""


class ConfigValidationError(EnvRenderError):
    """Raised when a project config file fails validation.

    All problems found in the file are collected before raising so the
    CLI can report them together.
    """

    exit_code = 2

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Config error at '{error.path}': {error.message}")
            else:
                messages.append(f"Config error: {error.message}")

        super().__init__("\n".join(messages))
