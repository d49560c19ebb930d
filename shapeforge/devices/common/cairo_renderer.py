# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Shared Cairo Rendering Module

Draws a shape list onto a Cairo context. Used by the PNG and SVG devices.

Architecture:
- render_shapes() is the entry point for device implementations
- World coordinates are fitted into the page with fit_viewport()
- Lines are infinite: they are drawn extended across the page diagonal
- A render budget is checked every RENDER_CHECK_INTERVAL shapes; on overrun
  drawing stops and a banner is painted
"""

import logging
import math
import time

import cairo

from ...core import types as sf
from ...core.geometry import bounding_box, fit_viewport

logger = logging.getLogger(__name__)

RENDER_CHECK_INTERVAL = 500
LINE_WIDTH = 2.0
POINT_RADIUS = 3.0
ENDPOINT_RADIUS = 2.0
ID_FONT_SIZE = 10.0


def parse_color(color: str | None) -> tuple[float, float, float]:
    """Convert ``#rgb`` or ``#rrggbb`` to an (r, g, b) tuple, defaulting to black."""
    if not color or not color.startswith("#"):
        return (0.0, 0.0, 0.0)
    digits = color[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        return (0.0, 0.0, 0.0)
    try:
        r, g, b = (int(digits[k:k + 2], 16) / 255.0 for k in (0, 2, 4))
    except ValueError:
        return (0.0, 0.0, 0.0)
    return (r, g, b)


def _draw_label(cc, text, x, y):
    cc.set_source_rgb(0.39, 0.45, 0.55)
    cc.move_to(x + 8, y - 8)
    cc.show_text(text)


def _is_drawable(shape: sf.Shape) -> bool:
    return all(math.isfinite(v) for v in shape.coords())


def _on_page(*points) -> bool:
    return all(math.isfinite(v) for pt in points for v in pt)


def _draw_shape(cc, shape, viewport, width, height):
    if not _is_drawable(shape):
        return None
    rgb = parse_color(shape.color)
    cc.set_source_rgb(*rgb)
    cc.set_line_width(LINE_WIDTH)
    cc.new_path()

    def to_page(x, y):
        return viewport.world_to_screen(x, y, width, height)

    if isinstance(shape, sf.Point):
        sx, sy = to_page(shape.x, shape.y)
        if not _on_page((sx, sy)):
            return None
        cc.arc(sx, sy, POINT_RADIUS, 0, 2 * math.pi)
        cc.fill()
        anchor = (sx, sy)

    elif isinstance(shape, sf.Line):
        dx = shape.p2.x / 2 - shape.p1.x / 2
        dy = shape.p2.y / 2 - shape.p1.y / 2
        length = math.hypot(dx, dy)
        if length == 0:
            return None
        ndx, ndy = dx / length, dy / length
        cx, cy = viewport.center_x, viewport.center_y
        t = (cx - shape.p1.x) * ndx + (cy - shape.p1.y) * ndy
        anchor = to_page(shape.p1.x + t * ndx, shape.p1.y + t * ndy)
        if not _on_page(anchor):
            return None
        # page y grows downwards
        extend = math.hypot(width, height) * 1.5
        ax, ay = anchor
        cc.move_to(ax - ndx * extend, ay + ndy * extend)
        cc.line_to(ax + ndx * extend, ay - ndy * extend)
        cc.stroke()

    elif isinstance(shape, sf.Segment):
        s1 = to_page(shape.p1.x, shape.p1.y)
        s2 = to_page(shape.p2.x, shape.p2.y)
        if not _on_page(s1, s2):
            return None
        cc.move_to(*s1)
        cc.line_to(*s2)
        cc.stroke()
        for sx, sy in (s1, s2):
            cc.arc(sx, sy, ENDPOINT_RADIUS, 0, 2 * math.pi)
            cc.fill()
        anchor = ((s1[0] + s2[0]) / 2, (s1[1] + s2[1]) / 2)

    elif isinstance(shape, sf.Circle):
        sx, sy = to_page(shape.x, shape.y)
        radius = abs(shape.r) * viewport.scale
        if not _on_page((sx, sy, radius)):
            return None
        cc.arc(sx, sy, radius, 0, 2 * math.pi)
        cc.stroke_preserve()
        cc.set_source_rgba(*rgb, 0.05)
        cc.fill()
        anchor = (sx, sy)

    elif isinstance(shape, sf.Polygon):
        corners = [to_page(p.x, p.y) for p in shape.points]
        if not _on_page(*corners):
            return None
        start = corners[0]
        cc.move_to(*start)
        for corner in corners[1:]:
            cc.line_to(*corner)
        cc.close_path()
        cc.stroke_preserve()
        cc.set_source_rgba(*rgb, 0.08)
        cc.fill()
        anchor = start

    elif isinstance(shape, sf.Text):
        sx, sy = to_page(shape.x, shape.y)
        if not _on_page((sx, sy)):
            return None
        cc.set_font_size(shape.font_size)
        extents = cc.text_extents(shape.content)
        cc.set_source_rgb(0.0, 0.0, 0.0)
        cc.move_to(sx - extents.width / 2 - extents.x_bearing,
                   sy - extents.height / 2 - extents.y_bearing)
        cc.show_text(shape.content)
        cc.set_font_size(ID_FONT_SIZE)
        return None

    else:
        return None

    if shape.label:
        _draw_label(cc, shape.label, *anchor)
    return anchor


def _draw_id(cc, text, x, y):
    cc.set_font_size(ID_FONT_SIZE)
    cc.move_to(x + 6, y - 6)
    cc.text_path(text)
    cc.set_source_rgba(1.0, 1.0, 1.0, 0.9)
    cc.set_line_width(4)
    cc.stroke_preserve()
    cc.set_source_rgb(0.06, 0.09, 0.16)
    cc.fill()


def _draw_timeout_indicator(cc, height):
    cc.set_source_rgba(1.0, 1.0, 1.0, 0.9)
    cc.rectangle(0, height - 30, 360, 30)
    cc.fill()
    cc.set_source_rgb(*parse_color("#ef4444"))
    cc.set_font_size(12)
    cc.move_to(10, height - 11)
    cc.show_text("Rendering timed out: showing partial results")


def render_shapes(shapes: list[sf.Shape], cc: "cairo.Context", width: float, height: float,
                  render_timeout_ms: float = sf.DEFAULT_RENDER_TIMEOUT,
                  show_ids: frozenset = frozenset(), index_base: int = 0) -> bool:
    """
    Render ``shapes`` to a Cairo context covering a width x height page.

    Args:
        shapes: Shapes in emission order (drawn in that order).
        cc: Cairo context to render to.
        width: Page width in device units.
        height: Page height in device units.
        render_timeout_ms: Rendering budget, checked every RENDER_CHECK_INTERVAL shapes.
        show_ids: Shape types whose ids are drawn next to them.
        index_base: 0 or 1, numbering used for drawn ids.

    Returns:
        True if every shape was drawn, False if the render budget ran out.
    """
    viewport = fit_viewport(bounding_box(shapes), width, height)
    cc.select_font_face("sans-serif", cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_NORMAL)
    cc.set_font_size(ID_FONT_SIZE)

    start = time.monotonic()
    for i, shape in enumerate(shapes):
        if i % RENDER_CHECK_INTERVAL == 0 and (time.monotonic() - start) * 1000.0 > render_timeout_ms:
            logger.warning("Rendering timed out after %d of %d shapes (> %gms)",
                           i, len(shapes), render_timeout_ms)
            _draw_timeout_indicator(cc, height)
            return False

        anchor = _draw_shape(cc, shape, viewport, width, height)
        if anchor is not None and shape.TYPE in show_ids:
            _draw_id(cc, sf.format_shape_id(shape.id, index_base), *anchor)

    return True
