# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI execution engine for ShapeForge.

Reads the format script and input data, runs the interpreter (optionally
under the profiler), selects an output device and hands it the shapes.
"""

from __future__ import annotations

import importlib
import logging
import os
import sys
import traceback
from typing import Any, Dict, Optional, Tuple

from .cli_args import get_output_base_name
from .core import types as sf
from .core.interpreter import interpret
from .core.snippets import SNIPPETS
from .utils import profiler as sf_profiler

logger = logging.getLogger(__name__)

# device name -> module providing showpage(shapes, pd)
DEVICE_MODULES = {
    "json": ".devices.json_out.json_out",
    "png": ".devices.png.png",
    "svg": ".devices.svg.svg",
}

FILE_DEVICES = ("png", "svg")


def _read_text_file(path: str, what: str) -> Tuple[Optional[str], int]:
    """Read a text file, reporting problems the way the CLI reports them."""
    if not os.path.exists(path):
        print(f"ShapeForge Error: {what} '{path}' not found.", file=sys.stderr)
        return None, 1
    if not os.path.isfile(path):
        print(f"ShapeForge Error: '{path}' is not a file.", file=sys.stderr)
        return None, 1
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read(), 0
    except PermissionError:
        print(f"ShapeForge Error: Permission denied reading '{path}'.", file=sys.stderr)
    except UnicodeDecodeError:
        print(
            f"ShapeForge Error: '{path}' contains invalid characters or is not a text file.",
            file=sys.stderr,
        )
    except OSError as e:
        print(f"ShapeForge Error: Cannot read '{path}': {e}", file=sys.stderr)
    return None, 1


def _read_stdin(explicit: bool) -> str:
    # an omitted INPUT on a terminal means "no input data"
    if sys.stdin is None or (not explicit and sys.stdin.isatty()):
        return ""
    return sys.stdin.read()


def load_sources(args) -> Tuple[Optional[str], Optional[str], int]:
    """
    Resolve the format script and input data from the parsed arguments.

    Returns:
        (format_script, input_data, exit_code); the texts are None when the
        exit code is non-zero.
    """
    if args.snippet:
        snippet = SNIPPETS[args.snippet]
        return snippet.format, snippet.input, 0

    if args.formatfile == "-":
        print("ShapeForge Error: the format script cannot be read from stdin.", file=sys.stderr)
        return None, None, 1
    script, code = _read_text_file(args.formatfile, "Format script")
    if code:
        return None, None, code

    if args.inputfile is None or args.inputfile == "-":
        return script, _read_stdin(args.inputfile == "-"), 0
    data, code = _read_text_file(args.inputfile, "Input file")
    if code:
        return None, None, code
    return script, data, 0


def select_device(device: Optional[str], outputfile: Optional[str]) -> str:
    """Pick the device: explicit -d, else the -o extension, else json."""
    if device:
        return device
    if outputfile:
        ext = os.path.splitext(outputfile)[1].lower().lstrip(".")
        if ext in DEVICE_MODULES:
            return ext
    return "json"


def apply_overrides(system_params: Dict[str, Any], args) -> Dict[str, Any]:
    """Overlay command-line values onto the system parameters."""
    overrides = {
        "ExecutionTimeout": args.timeout,
        "RenderTimeout": args.render_timeout,
        "IndexBase": args.index_base,
        "PageWidth": args.width,
        "PageHeight": args.height,
        "OutputDirectory": args.output_dir,
    }
    for key, val in overrides.items():
        if val is not None:
            system_params[key] = val
    return system_params


def _build_page_device(args, system_params: Dict[str, Any], device: str) -> Dict[str, Any]:
    pd = {
        "PageWidth": system_params["PageWidth"],
        "PageHeight": system_params["PageHeight"],
        "RenderTimeout": system_params["RenderTimeout"],
        "IndexBase": system_params["IndexBase"],
        "ShowIds": args.show_ids or frozenset(),
        "OutputFile": args.outputfile,
    }
    if device in FILE_DEVICES and not args.outputfile:
        output_dir = system_params["OutputDirectory"]
        os.makedirs(output_dir, exist_ok=True)
        base_name = get_output_base_name(args.outputfile, args.formatfile, args.snippet)
        pd["OutputFile"] = os.path.join(output_dir, f"{base_name}.{device}")
    return pd


def _render(shapes: list[sf.Shape], device: str, pd: Dict[str, Any]) -> int:
    try:
        module = importlib.import_module(DEVICE_MODULES[device], __package__)
    except ModuleNotFoundError as e:
        print(f"ShapeForge Error: Missing required Python module: {e}", file=sys.stderr)
        print(f"The {device} device requires pycairo: pip install pycairo", file=sys.stderr)
        return 1

    try:
        output_file = module.showpage(shapes, pd)
    except OSError as e:
        print(f"ShapeForge Error: Cannot write output: {e}", file=sys.stderr)
        return 1

    if output_file:
        print(f"Wrote {len(shapes)} shapes to {output_file}", file=sys.stderr)
    return 0


def run(args, system_params: Dict[str, Any], available_devices: list[str]) -> int:
    """Core ShapeForge execution logic.

    Args:
        args: Parsed CLI arguments.
        system_params: Parameters from init_system_params(), already
            overridden by the command line.
        available_devices: List of available device names.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    device = select_device(args.device, args.outputfile)
    if device not in available_devices:
        print(f"ShapeForge Error: Output device '{device}' not found.", file=sys.stderr)
        return 1

    format_script, input_data, code = load_sources(args)
    if code:
        return code

    # Performance profiling setup
    profile_type = "cprofile" if args.profile else "none"
    profile_output = args.profile_output
    if args.profile and not profile_output:
        profile_output = sf_profiler.generate_default_output_path(profile_type)

    perf_profiler = sf_profiler.initialize_profiler(
        backend_type=profile_type,
        output_path=profile_output,
        enabled=args.profile
    )
    if args.profile:
        print(f"Performance profiling enabled (backend: {profile_type})", file=sys.stderr)

    try:
        with perf_profiler.profile_context():
            result = interpret(format_script, input_data, system_params["ExecutionTimeout"])
    except Exception as e:
        print(f"ShapeForge Error: {e}", file=sys.stderr)
        if args.verbose:
            traceback.print_exc()
        return 1

    if args.profile:
        perf_profiler.save_results()
        logger.debug(perf_profiler.generate_report())

    if not result.ok:
        print(f"ShapeForge Error: {result.error}", file=sys.stderr)
        return 1

    logger.info("Interpreted %d shapes", len(result.shapes))
    pd = _build_page_device(args, system_params, device)
    return _render(result.shapes, device, pd)


def list_snippets() -> int:
    for name, snippet in SNIPPETS.items():
        print(f"{name:16} {snippet.label}")
    return 0
