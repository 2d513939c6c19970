#!/usr/bin/env python3
"""
CLI utilities for kana layout tools.

Common functions for command-line argument parsing, logging setup and
error handling shared by the command-line scripts.
"""

import argparse
import logging
import sys
import traceback
from typing import List, Optional

import yaml

from kana_layout.layout_search import PlacementError

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def create_parser(description: str, examples: Optional[List[str]] = None,
                  output_formats: Optional[List[str]] = None) -> argparse.ArgumentParser:
    """
    Create an argument parser with the options every script shares.

    Args:
        description: Script description for --help
        examples: Example command lines shown in the epilog
        output_formats: Allowed --output-format values (first is the default)

    Returns:
        Parser with input, output and logging options added
    """
    epilog = None
    if examples:
        epilog = "\n".join(["Examples:"] + [f"  {example}" for example in examples])

    parser = argparse.ArgumentParser(
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog
    )

    input_group = parser.add_argument_group('Input Options')
    input_group.add_argument(
        '--config',
        dest='config',
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)"
    )

    output_group = parser.add_argument_group('Output Options')
    output_formats = output_formats or ['detailed', 'csv', 'score_only']
    output_group.add_argument(
        '--output-format',
        dest='output_format',
        choices=output_formats,
        default=output_formats[0],
        help=f"Output format (default: {output_formats[0]})"
    )
    output_group.add_argument(
        '--quiet',
        dest='quiet',
        action='store_true',
        help="Only log warnings and errors"
    )
    output_group.add_argument(
        '--verbose',
        dest='verbose',
        action='store_true',
        help="Log debug output"
    )

    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Set up root logging for a command-line run."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def handle_common_errors(func):
    """
    Decorator to handle common CLI errors gracefully.

    Args:
        func: Function to wrap (typically main())

    Returns:
        Wrapped function returning an exit status on error
    """
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print("\nOperation cancelled by user.", file=sys.stderr)
            return 130
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except yaml.YAMLError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return 1
        except PlacementError as e:
            print(f"Search failed: {e}", file=sys.stderr)
            return 1
        except PermissionError as e:
            print(f"Permission error: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            traceback.print_exc()
            return 1

    return wrapper
