# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ShapeForge Types Package - Public API

Re-exports the shape records, the execution context and the shared
constants so callers can use the single namespace pattern::

    from ..core import types as sf

    ctxt = sf.Context(stream, guard)
    shape = sf.Point(id="P0", x=1.0, y=2.0)

**Internal Module Organization:**
- constants.py: keywords, shape type tags, id prefixes, palette, defaults
- shapes.py: shape records, ParseResult and id formatting
- context.py: execution context and variable name validation
- control.py: statement outcomes (normal, break, continue)
"""

from .constants import *
from .shapes import *
from .context import *
from .control import *
