# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ShapeForge configuration and context initialization.

System parameters are a plain dictionary built by ``init_system_params()``;
the command line overrides individual entries. ``create_context()`` builds
the fresh per-run execution context.
"""

import logging
import math
import os
from typing import Any, Dict

from . import types as sf
from .timeout import TimeoutGuard
from .tokenizer import InputStream

logger = logging.getLogger(__name__)

TIMEOUT_ENV_VAR = "SHAPEFORGE_TIMEOUT"


def _env_timeout(default: float) -> float:
    raw = os.environ.get(TIMEOUT_ENV_VAR)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", TIMEOUT_ENV_VAR, raw)
        return default
    if not math.isfinite(val) or val <= 0:
        logger.warning("Ignoring %s=%r: must be a positive finite number", TIMEOUT_ENV_VAR, raw)
        return default
    return val


def init_system_params() -> Dict[str, Any]:
    """
    Initialize the system parameters for the interpreter and output devices.

    Returns:
        Dict[str, Any]: System parameters dictionary containing:
            - ExecutionTimeout: script execution budget in milliseconds
              (``SHAPEFORGE_TIMEOUT`` overrides the default)
            - RenderTimeout: device rendering budget in milliseconds
            - IndexBase: 0 or 1, numbering used when ids are displayed
            - PageWidth / PageHeight: device page size in pixels (points for SVG)
            - OutputDirectory: directory for device output files
            - Revision: interpreter revision
    """
    return {
        "ExecutionTimeout": _env_timeout(sf.DEFAULT_EXECUTION_TIMEOUT),
        "RenderTimeout": sf.DEFAULT_RENDER_TIMEOUT,
        "IndexBase": 0,
        "PageWidth": 800,
        "PageHeight": 600,
        "OutputDirectory": sf.OUTPUT_DIRECTORY,
        "Revision": 1,
    }


def create_context(input_data: str, timeout_ms: float = sf.DEFAULT_EXECUTION_TIMEOUT) -> sf.Context:
    """Create the execution context for one run; the timeout clock starts now."""
    return sf.Context(InputStream(input_data), TimeoutGuard(timeout_ms))
