# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
ShapeForge Types Shapes Module

The shape records emitted by the interpreter. Every shape carries a unique
id, an optional colour, an optional label and the id of the innermost
enclosing group. Shapes are frozen once created; the shape list in the
execution context only ever grows.

``to_dict()`` produces the JSON form consumed by viewers, using the same
camelCase keys (``groupId``, ``fontSize``) and omitting unset attributes.
"""

from dataclasses import dataclass, field
from typing import Any

from .constants import (
    DEFAULT_FONT_SIZE,
    T_CIRCLE, T_LINE, T_POINT, T_POLYGON, T_SEGMENT, T_TEXT,
)


@dataclass(frozen=True)
class Coord:
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True, kw_only=True)
class Shape:
    """Attributes common to every shape variant."""
    TYPE = None

    id: str
    color: str | None = None
    label: str | None = None
    group_id: str | None = None

    def _geometry(self) -> dict[str, Any]:
        return {}

    def coords(self) -> list[float]:
        """Every coordinate and size of the shape, in declaration order."""
        return []

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.id, "type": self.TYPE}
        d.update(self._geometry())
        if self.color is not None:
            d["color"] = self.color
        if self.label is not None:
            d["label"] = self.label
        if self.group_id is not None:
            d["groupId"] = self.group_id
        return d


@dataclass(frozen=True, kw_only=True)
class Point(Shape):
    TYPE = T_POINT

    x: float
    y: float

    def coords(self) -> list[float]:
        return [self.x, self.y]

    def _geometry(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True, kw_only=True)
class Line(Shape):
    """Infinite line through p1 and p2."""
    TYPE = T_LINE

    p1: Coord
    p2: Coord

    def coords(self) -> list[float]:
        return [self.p1.x, self.p1.y, self.p2.x, self.p2.y]

    def _geometry(self) -> dict[str, Any]:
        return {"p1": self.p1.to_dict(), "p2": self.p2.to_dict()}


@dataclass(frozen=True, kw_only=True)
class Segment(Shape):
    TYPE = T_SEGMENT

    p1: Coord
    p2: Coord

    def coords(self) -> list[float]:
        return [self.p1.x, self.p1.y, self.p2.x, self.p2.y]

    def _geometry(self) -> dict[str, Any]:
        return {"p1": self.p1.to_dict(), "p2": self.p2.to_dict()}


@dataclass(frozen=True, kw_only=True)
class Circle(Shape):
    TYPE = T_CIRCLE

    x: float
    y: float
    r: float

    def coords(self) -> list[float]:
        return [self.x, self.y, self.r]

    def _geometry(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "r": self.r}


@dataclass(frozen=True, kw_only=True)
class Polygon(Shape):
    TYPE = T_POLYGON

    points: tuple[Coord, ...] = field(default_factory=tuple)

    def coords(self) -> list[float]:
        return [v for p in self.points for v in (p.x, p.y)]

    def _geometry(self) -> dict[str, Any]:
        return {"points": [p.to_dict() for p in self.points]}


@dataclass(frozen=True, kw_only=True)
class Text(Shape):
    TYPE = T_TEXT

    x: float
    y: float
    content: str
    font_size: float = DEFAULT_FONT_SIZE

    def coords(self) -> list[float]:
        return [self.x, self.y, self.font_size]

    def _geometry(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "content": self.content, "fontSize": self.font_size}


@dataclass(frozen=True)
class ParseResult:
    """Outcome of one interpretation run. On error ``shapes`` is empty."""
    shapes: list[Shape]
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {"shapes": [s.to_dict() for s in self.shapes], "error": self.error}


def format_shape_id(shape_id: str, index_base: int) -> str:
    """Render a shape id for display with 0- or 1-based numbering.

    ``P0`` stays ``P0`` for index base 0 and becomes ``P1`` for base 1.
    Ids without a trailing number are returned unchanged.
    """
    if index_base == 0:
        return shape_id
    prefix = shape_id.rstrip("0123456789")
    digits = shape_id[len(prefix):]
    if not digits:
        return shape_id
    return f"{prefix}{int(digits) + index_base}"
