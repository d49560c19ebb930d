# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
SVG Output Device

This device renders a shape list to an SVG file using Cairo's SVGSurface.
Page units are points, one point per page pixel of the PNG device.
"""

import io
import os

import cairo

from ...core import types as sf
from ..common.cairo_renderer import render_shapes


def showpage(shapes: list[sf.Shape], pd: dict) -> str:
    """
    Render ``shapes`` to an SVG file.

    Args:
        shapes: Shapes to draw.
        pd: Page device dictionary with PageWidth, PageHeight, RenderTimeout,
            OutputFile and optionally ShowIds and IndexBase.

    Returns:
        Path of the written file.
    """
    width = float(pd["PageWidth"])
    height = float(pd["PageHeight"])

    # Render to an in-memory buffer, then write in one go
    svg_buffer = io.BytesIO()
    surface = cairo.SVGSurface(svg_buffer, width, height)
    surface.set_document_unit(cairo.SVG_UNIT_PT)
    cc = cairo.Context(surface)

    # Fill white background
    cc.set_source_rgb(1.0, 1.0, 1.0)
    cc.rectangle(0, 0, width, height)
    cc.fill()

    render_shapes(shapes, cc, width, height, pd["RenderTimeout"],
                  pd.get("ShowIds", frozenset()), pd.get("IndexBase", 0))

    # Finish Cairo surface to flush SVG output
    surface.finish()

    output_file = os.path.abspath(pd["OutputFile"])
    with open(output_file, "wb") as f:
        f.write(svg_buffer.getvalue())
    return output_file
