"""
Variable resolution implementation.
Turns a resolution mode and an optional .env path into a BindingSet.

Four modes are supported:
- file-only, explicit path: exactly the pairs in the given file
- file-only, default path: exactly the pairs in the discovered .env
- all-env, explicit path: ambient environment overlaid with the file
- all-env, default path: ambient environment overlaid with the discovered
  .env, or the ambient environment alone when there is none

The process environment is only ever read. Loaded values are merged into
a snapshot of it instead of being exported into os.environ.
"""

import io
import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values, find_dotenv
from dotenv.parser import parse_stream
from dotenv.variables import parse_variables

from envrender.exceptions import SourceIOError, SourceParseError
from envrender.variables.types import BindingSet, ResolutionMode


logger = logging.getLogger(__name__)

DEFAULT_FILENAME = ".env"

PathLike = Union[str, Path]


def _canonicalize(path: PathLike) -> Path:
    """Resolve a path to an absolute, symlink-free form at load time."""
    try:
        return Path(path).resolve(strict=True)
    except FileNotFoundError:
        raise SourceIOError(path, "No such file or directory")
    except (OSError, RuntimeError) as e:
        raise SourceIOError(path, str(e))


def _interpolate(raw: Dict[str, str], environ: Mapping[str, str]) -> Dict[str, str]:
    """Expand ${VAR} references, earlier file values first, then environ."""
    resolved: Dict[str, str] = {}
    for key, value in raw.items():
        scope = dict(environ)
        scope.update(resolved)
        resolved[key] = "".join(atom.resolve(scope) for atom in parse_variables(value))
    return resolved


def load_source(
    path: PathLike,
    interpolate: bool = True,
    environ: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """
    Parse a single .env file into a name -> value dict.

    Args:
        path: File to parse; canonicalized before it is opened
        interpolate: Expand ${VAR} references inside values
        environ: Fallback for references the file does not define
            (defaults to os.environ)

    Returns:
        Parsed pairs. Later definitions of a key override earlier ones.

    Raises:
        SourceIOError: File missing, unreadable or not valid UTF-8
        SourceParseError: A line violates the .env grammar
    """
    source = _canonicalize(path)
    try:
        text = source.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise SourceIOError(source, f"not valid UTF-8 ({e.reason})")
    except OSError as e:
        raise SourceIOError(source, e.strerror or str(e))

    for binding in parse_stream(io.StringIO(text)):
        if binding.error:
            raise SourceParseError(source, binding.original.line, binding.original.string)

    values: Dict[str, str] = {}
    parsed = dotenv_values(stream=io.StringIO(text), interpolate=False)
    for key, value in parsed.items():
        if value is None:
            logger.warning(f"Ignoring '{key}' in {source}: no value assigned")
            continue
        values[key] = value

    if interpolate:
        values = _interpolate(values, os.environ if environ is None else environ)

    logger.debug(f"Loaded {len(values)} variable(s) from {source}")
    return values


def _find_default(filename: str) -> Optional[Path]:
    """Locate the default file in the working directory or one of its parents."""
    found = find_dotenv(filename, usecwd=True)
    return Path(found) if found else None


def resolve(
    expose_all: bool,
    source: Optional[PathLike] = None,
    *,
    interpolate: bool = True,
    environ: Optional[Mapping[str, str]] = None,
    default_filename: str = DEFAULT_FILENAME
) -> BindingSet:
    """
    Build the binding set for one render.

    Args:
        expose_all: Expose the whole process environment, not just the file
        source: Explicit .env path; the default filename is used when None
        interpolate: Expand ${VAR} references inside .env values
        environ: Ambient environment to snapshot and to expand ${VAR}
            references against (defaults to os.environ)
        default_filename: Name searched for when no source is given

    Returns:
        Fully resolved, immutable BindingSet

    Raises:
        SourceIOError: The source file is missing or unreadable. In all-env
            mode a missing default file is not an error.
        SourceParseError: The source file is malformed
    """
    mode = ResolutionMode.select(expose_all, source is not None)
    logger.debug(f"Resolving variables in {mode.value} mode")

    if source is not None:
        path: Optional[Path] = _canonicalize(source)
    else:
        path = _find_default(default_filename)
        if path is None:
            missing = Path.cwd() / default_filename
            if not mode.exposes_environment:
                raise SourceIOError(missing, "No such file or directory")
            logger.info(f"No {default_filename} found from {Path.cwd()}, using environment only")

    ambient = os.environ if environ is None else environ
    file_values = load_source(path, interpolate, ambient) if path is not None else {}

    if not mode.exposes_environment:
        return BindingSet(values=file_values, mode=mode, source=path)

    values = dict(ambient)
    overridden = [key for key in file_values if key in values]
    if overridden:
        logger.debug(f"File values override environment for: {sorted(overridden)}")
    values.update(file_values)

    return BindingSet(values=values, mode=mode, source=path)
