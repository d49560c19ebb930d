# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
World-space helpers used by the output devices: the padded bounding box of
a shape list and the viewport mapping between world and device space
(device y grows downwards).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from . import types as sf

EMPTY_BBOX = (-10.0, -10.0, 10.0, 10.0)


def bounding_box(shapes: list[sf.Shape]) -> tuple[float, float, float, float]:
    """
    Padded (min_x, min_y, max_x, max_y) of ``shapes``.

    Text shapes do not contribute. Padding is 10% of each extent with a
    minimum of 1. An empty list (or one holding only text) yields
    (-10, -10, 10, 10), as does a box whose padded bounds overflow.
    """
    xs: list[float] = []
    ys: list[float] = []

    for s in shapes:
        if isinstance(s, sf.Point):
            xs.append(s.x)
            ys.append(s.y)
        elif isinstance(s, (sf.Line, sf.Segment)):
            xs.extend((s.p1.x, s.p2.x))
            ys.extend((s.p1.y, s.p2.y))
        elif isinstance(s, sf.Circle):
            xs.extend((s.x - s.r, s.x + s.r))
            ys.extend((s.y - s.r, s.y + s.r))
        elif isinstance(s, sf.Polygon):
            xs.extend(p.x for p in s.points)
            ys.extend(p.y for p in s.points)

    xs = [x for x in xs if math.isfinite(x)]
    ys = [y for y in ys if math.isfinite(y)]
    if not xs or not ys:
        return EMPTY_BBOX

    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    # half extents stay finite for any pair of finite bounds
    pad_x = max((max_x / 2 - min_x / 2) * 0.2, 1.0)
    pad_y = max((max_y / 2 - min_y / 2) * 0.2, 1.0)
    bbox = (min_x - pad_x, min_y - pad_y, max_x + pad_x, max_y + pad_y)
    if not all(math.isfinite(v) for v in bbox):
        return EMPTY_BBOX
    return bbox


@dataclass
class Viewport:
    center_x: float
    center_y: float
    scale: float

    def world_to_screen(self, wx: float, wy: float, width: float, height: float) -> tuple[float, float]:
        sx = (wx - self.center_x) * self.scale + width / 2
        sy = -(wy - self.center_y) * self.scale + height / 2
        return sx, sy

    def screen_to_world(self, sx: float, sy: float, width: float, height: float) -> tuple[float, float]:
        wx = (sx - width / 2) / self.scale + self.center_x
        wy = (sy - height / 2) / -self.scale + self.center_y
        return wx, wy


def fit_viewport(bbox: tuple[float, float, float, float], width: float, height: float) -> Viewport:
    """
    Viewport that shows all of ``bbox`` centred on a width x height page.

    A box that is not finite or has no area is replaced by EMPTY_BBOX, and
    the scale is always finite and positive.
    """
    if not all(math.isfinite(v) for v in bbox) or bbox[2] <= bbox[0] or bbox[3] <= bbox[1]:
        bbox = EMPTY_BBOX
    min_x, min_y, max_x, max_y = bbox
    half_w = max_x / 2 - min_x / 2
    half_h = max_y / 2 - min_y / 2
    scale = min(width / 2 / half_w, height / 2 / half_h)
    if not math.isfinite(scale) or scale <= 0:
        scale = 1.0
    return Viewport(min_x / 2 + max_x / 2, min_y / 2 + max_y / 2, scale)
