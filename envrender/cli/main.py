"""Main CLI entry point for envrender."""

import argparse
import sys
from typing import Optional

from envrender.config import LOG_LEVELS
from .commands import render_template_command


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the envrender CLI."""
    parser = argparse.ArgumentParser(
        prog='envrender',
        description='Render a template file using values from the environment'
    )

    parser.add_argument(
        'file',
        type=str,
        help='The template to render'
    )
    parser.add_argument(
        '-a', '--all',
        dest='all_env',
        action='store_true',
        default=None,
        help='Expose the entire environment to the template, not just the .env contents'
    )
    parser.add_argument(
        '-v', '--vars',
        type=str,
        metavar='PATH',
        help='Load the variables from this file instead of .env'
    )
    parser.add_argument(
        '-o', '--output',
        type=str,
        metavar='PATH',
        help='Write the rendered template to this file instead of stdout'
    )
    parser.add_argument(
        '-c', '--config',
        type=str,
        metavar='PATH',
        help='Path to a YAML config file with default options'
    )
    parser.add_argument(
        '--no-interpolate',
        dest='interpolate',
        action='store_false',
        default=None,
        help='Keep ${VAR} references inside .env values literal'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--log-level',
        choices=list(LOG_LEVELS),
        default=None,
        help='Set log level (default: warn)'
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    return render_template_command(parsed_args)


if __name__ == '__main__':
    sys.exit(main())
