# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
PNG Output Device

This device renders a shape list to a PNG image file using Cairo.
It uses the shared cairo_renderer module for drawing.
"""

import os

import cairo

from ...core import types as sf
from ..common.cairo_renderer import render_shapes

# Anti-aliasing mode for Cairo rendering.
# Options: cairo.ANTIALIAS_NONE, ANTIALIAS_FAST, ANTIALIAS_GOOD,
#          ANTIALIAS_BEST, ANTIALIAS_GRAY, ANTIALIAS_SUBPIXEL
ANTIALIAS_MODE = cairo.ANTIALIAS_GRAY


def showpage(shapes: list[sf.Shape], pd: dict) -> str:
    """
    Render ``shapes`` to a PNG file.

    Args:
        shapes: Shapes to draw.
        pd: Page device dictionary with PageWidth, PageHeight, RenderTimeout,
            OutputFile and optionally ShowIds and IndexBase.

    Returns:
        Path of the written file.
    """
    width = int(pd["PageWidth"])
    height = int(pd["PageHeight"])

    surface = cairo.ImageSurface(cairo.FORMAT_RGB24, width, height)
    cc = cairo.Context(surface)

    # Fill in the white background
    cc.set_source_rgb(1.0, 1.0, 1.0)
    cc.rectangle(0, 0, width, height)
    cc.fill()

    cc.set_antialias(ANTIALIAS_MODE)

    render_shapes(shapes, cc, width, height, pd["RenderTimeout"],
                  pd.get("ShowIds", frozenset()), pd.get("IndexBase", 0))

    output_file = os.path.abspath(pd["OutputFile"])
    surface.write_to_png(output_file)
    return output_file
