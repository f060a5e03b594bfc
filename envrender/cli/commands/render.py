"""Render command implementation."""

import io
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from envrender.config import ConfigLoader, RenderConfig
from envrender.exceptions import EnvRenderError, OutputWriteError
from envrender.rendering import read_template, render_to
from envrender.variables import resolve


logger = logging.getLogger(__name__)


@dataclass
class RenderOptions:
    """Effective options for one invocation after config and CLI are merged."""
    template: Path
    all_env: bool = False
    vars: Optional[Path] = None
    output: Optional[Path] = None
    interpolate: bool = True
    log_level: str = 'warn'


def build_options(args: Namespace) -> RenderOptions:
    """
    Merge CLI arguments over the config file (if any) over defaults.

    Paths stay as given; they are canonicalized when the files are opened.
    """
    config = RenderConfig()
    if getattr(args, 'config', None):
        config = ConfigLoader().load(Path(args.config))

    options = RenderOptions(
        template=Path(args.file),
        all_env=config.all_env,
        vars=config.vars,
        output=config.output,
        interpolate=config.interpolate,
        log_level=config.log_level,
    )

    if getattr(args, 'all_env', None) is not None:
        options.all_env = args.all_env
    if getattr(args, 'vars', None):
        options.vars = Path(args.vars)
    if getattr(args, 'output', None):
        options.output = Path(args.output)
    if getattr(args, 'interpolate', None) is not None:
        options.interpolate = args.interpolate
    if getattr(args, 'log_level', None):
        options.log_level = args.log_level

    return options


def run(options: RenderOptions, out: TextIO) -> None:
    """
    Resolve variables, read the template and render it to out.

    Every failure propagates as an EnvRenderError subclass.
    """
    bindings = resolve(options.all_env, options.vars, interpolate=options.interpolate)
    logger.info(f"Resolved {len(bindings)} variable(s) ({bindings.mode.value})")

    template = read_template(options.template)
    logger.info(f"Rendering template: {options.template}")
    render_to(template, bindings, out)


def _write_output_file(options: RenderOptions) -> None:
    """Run with a file sink, creating parent directories as needed.

    The file is only opened once rendering has succeeded.
    """
    buffer = io.StringIO()
    run(options, buffer)

    output = options.output
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(buffer.getvalue(), encoding='utf-8')
    except OSError as e:
        raise OutputWriteError(str(output), e.strerror or str(e))
    logger.info(f"Wrote rendered template to {output}")


def _configure_logging(args: Namespace, options: RenderOptions) -> None:
    level_name = 'warning' if options.log_level == 'warn' else options.log_level
    log_level = getattr(logging, level_name.upper())
    if getattr(args, 'debug', False):
        log_level = logging.DEBUG
    elif getattr(args, 'quiet', False):
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger('envrender').setLevel(log_level)


def render_template_command(args: Namespace) -> int:
    """
    Render a template as requested on the command line.

    Returns:
        Exit code: 0 on success, the error's exit_code otherwise
    """
    try:
        options = build_options(args)
    except EnvRenderError as e:
        print(str(e), file=sys.stderr)
        return e.exit_code

    _configure_logging(args, options)

    try:
        if options.output is not None:
            _write_output_file(options)
        else:
            run(options, sys.stdout)
        return 0

    except EnvRenderError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        print(str(e), file=sys.stderr)
        return e.exit_code
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1
