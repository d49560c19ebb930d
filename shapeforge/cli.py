#!/usr/bin/env python3
# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ShapeForge - Format Script Interpreter

This is the main entry point for ShapeForge. A format script describes how
to read whitespace separated numbers from an input file and which shapes
(points, lines, segments, circles, polygons, text) to emit for them.

Architecture Overview:
    - Token Stream: input data consumed by Read commands
    - Scope Stack: variables, one scope per loop iteration
    - Shape List: shapes emitted so far, with ids, colours and group ids
    - Timeout Guard: wall clock budget for one run

Usage:
    shapeforge script.fmt input.txt
    shapeforge script.fmt input.txt -o shapes.png
    cat input.txt | shapeforge script.fmt -d svg
    shapeforge --snippet groups

Author: Scott Bowman
License: AGPL-3.0-or-later
"""

import logging
import math
import sys

from .cli_args import build_argument_parser
from .cli_runner import DEVICE_MODULES, apply_overrides, list_snippets, run
from .core.context_init import init_system_params
from .core.snippets import SNIPPETS


def _positive(val: float) -> bool:
    return math.isfinite(val) and val > 0


def main(argv=None) -> int:
    """
    Main entry point for the ShapeForge interpreter.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Exit code: 0 for success, 1 for error
    """
    available_devices = list(DEVICE_MODULES)
    parser = build_argument_parser(available_devices, list(SNIPPETS))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_snippets:
        return list_snippets()

    if not args.formatfile and not args.snippet:
        parser.error("a format script (or --snippet NAME) is required")

    if args.timeout is not None and not _positive(args.timeout):
        print("ShapeForge Error: Timeout must be a positive number of milliseconds.", file=sys.stderr)
        return 1
    if args.render_timeout is not None and not _positive(args.render_timeout):
        print("ShapeForge Error: Render timeout must be a positive number of milliseconds.", file=sys.stderr)
        return 1
    if (args.width is not None and args.width <= 0) or (args.height is not None and args.height <= 0):
        print("ShapeForge Error: Page width and height must be positive.", file=sys.stderr)
        return 1

    system_params = apply_overrides(init_system_params(), args)
    return run(args, system_params, available_devices)


if __name__ == "__main__":
    sys.exit(main())
