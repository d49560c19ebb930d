# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for ShapeForge.

Handles command-line argument definition, parsing of the shape type list
for ``--show-ids``, and output file naming.
"""

from __future__ import annotations

import argparse
import os
from importlib import metadata

from .core import types as sf


def parse_shape_types(value: str) -> frozenset[str]:
    """Parse a comma separated list of shape types (or ``all``).

    Names are case-insensitive: ``point,seg`` and ``POINT,SEGMENT`` are
    both accepted; ``seg`` is an alias of ``segment`` and ``poly`` of
    ``polygon``.

    Raises:
        ValueError: If a name is not a shape type.
    """
    aliases = {"seg": sf.T_SEGMENT, "poly": sf.T_POLYGON}
    types: set[str] = set()
    for part in value.split(","):
        name = part.strip().lower()
        if not name:
            continue
        if name == "all":
            return frozenset(sf.SHAPE_TYPES)
        shape_type = aliases.get(name, name.upper())
        if shape_type not in sf.SHAPE_TYPES:
            raise ValueError(f"Unknown shape type: '{part.strip()}'")
        types.add(shape_type)
    return frozenset(types)


def get_output_base_name(outputfile: str | None, formatfile: str | None,
                         snippet: str | None = None) -> str:
    """
    Derive the output base name from command-line arguments.

    Args:
        outputfile: The -o argument value (or None)
        formatfile: The format script path (or None)
        snippet: The --snippet name (or None)

    Returns:
        Base name for output files (without extension)
    """
    if outputfile:
        return os.path.splitext(os.path.basename(outputfile))[0]
    if snippet:
        return snippet
    if formatfile and formatfile != "-":
        return os.path.splitext(os.path.basename(formatfile))[0]
    return "shapes"


def _get_version() -> str:
    try:
        return metadata.version("shapeforge")
    except metadata.PackageNotFoundError:
        return "unknown"


def _shape_type_list(value: str) -> frozenset[str]:
    try:
        return parse_shape_types(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_argument_parser(available_devices: list[str], snippet_names: list[str]) -> argparse.ArgumentParser:
    """
    Create and configure the ShapeForge argument parser.

    Args:
        available_devices: Output device names.
        snippet_names: Names of the bundled example scripts.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="shapeforge",
        description="ShapeForge - Format Script Interpreter",
        epilog="If INPUT is omitted or '-', input data is read from standard input.",
    )

    parser.add_argument(
        "-V", "--version", action="version",
        version=f"ShapeForge {_get_version()}"
    )
    parser.add_argument("formatfile", nargs="?", help="Format script to run")
    parser.add_argument("inputfile", nargs="?", help="Input data read by the script's Read commands")
    parser.add_argument(
        "-o", "--output", dest="outputfile", help="Specify output filename"
    )
    parser.add_argument(
        "-d",
        "--device",
        choices=available_devices,
        help=f'Specify output device ({", ".join(available_devices)}); '
             f'default is inferred from the output filename, else json',
    )
    parser.add_argument(
        "-t", "--timeout", type=float, dest="timeout",
        help="Script execution timeout in milliseconds (default: 3000)"
    )
    parser.add_argument(
        "--render-timeout", type=float, dest="render_timeout",
        help="Rendering timeout in milliseconds for png/svg output (default: 200)"
    )
    parser.add_argument(
        "--index-base", type=int, choices=[0, 1], dest="index_base",
        help="Number shape ids from 0 (P0, P1, ...) or from 1 (P1, P2, ...) in output"
    )
    parser.add_argument(
        "--show-ids", type=_shape_type_list, dest="show_ids",
        help="Draw ids for these shape types in png/svg output (e.g. point,seg or all)"
    )
    parser.add_argument("--width", type=int, help="Page width for png/svg output (default: 800)")
    parser.add_argument("--height", type=int, help="Page height for png/svg output (default: 600)")
    parser.add_argument(
        "--output-dir", dest="output_dir",
        help="Directory for png/svg output when -o is not given (default: sf_output)"
    )
    parser.add_argument(
        "--snippet", choices=snippet_names,
        help="Run a bundled example script instead of files"
    )
    parser.add_argument(
        "--list-snippets", action="store_true", help="List the bundled example scripts and exit"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    # Performance profiling options
    parser.add_argument(
        "--profile", action="store_true",
        help="Enable performance profiling (cProfile)"
    )
    parser.add_argument(
        "--profile-output",
        help="Specify output file for profiling results (default: auto-generated)"
    )

    return parser
