# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bundled example format scripts with matching input data."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Snippet:
    label: str
    format: str
    input: str


SNIPPETS = {
    "default": Snippet(
        label="Test Cases (Polygons)",
        format=(
            "Read t\n"
            "rep t:\n"
            "\tRead n\n"
            "\trep n:\n"
            "\t\tRead x y\n"
            "\t\tPush x y\n"
            "\t\tPoint x y\n"
            "\tPoly"
        ),
        input="2\n3\n0 0\n50 -20\n20 40\n4\n-50 -50\n-20 -50\n-20 -20\n-50 -20",
    ),
    "points": Snippet(
        label="Points Cloud",
        format="Read n\nrep n:\n\tRead x y\n\tPoint x y",
        input="10\n10 10\n20 50\n50 20\n80 80\n30 40\n60 10\n90 50\n20 90\n40 60\n70 30",
    ),
    "segments": Snippet(
        label="Line Segments",
        format="Read n\nrep n:\n\tRead x1 y1 x2 y2\n\tSeg x1 y1 x2 y2",
        input="5\n0 0 50 50\n10 80 90 20\n20 20 20 80\n80 20 80 80\n0 50 100 50",
    ),
    "circles": Snippet(
        label="Circles",
        format="Read n\nrep n:\n\tRead x y r\n\tCircle x y r",
        input="4\n20 20 15\n50 50 25\n80 20 10\n50 80 15",
    ),
    "polygon_simple": Snippet(
        label="Simple Polygon",
        format="Read n\nrep n:\n\tRead x y\n\tPush x y\n\tPoint x y\nPoly",
        input="5\n0 0\n40 0\n60 40\n20 80\n-20 40",
    ),
    "lines": Snippet(
        label="Lines",
        format="Read n\nrep n:\n\tRead x1 y1 x2 y2\n\tLine x1 y1 x2 y2",
        input="3\n0 0 1 1\n0 50 1 50\n50 0 50 1",
    ),
    "groups": Snippet(
        label="Groups",
        format=(
            "Read t\n"
            "rep i t:\n"
            "\tgroup i:\n"
            "\t\tRead n\n"
            "\t\trep n:\n"
            "\t\t\tRead x y\n"
            "\t\t\tPoint x y\n"
            "\t\t\tPush x y\n"
            "\t\tPoly\n"
            "\t\tText 0 i*10 \"case\" 10"
        ),
        input="2\n3\n0 0\n30 0\n15 25\n3\n40 0\n70 0\n55 -25",
    ),
    "control_flow": Snippet(
        label="Conditionals",
        format=(
            "Read n\n"
            "rep i n:\n"
            "\tif i % 3 == 0:\n"
            "\t\tCircle i*10 0 3 #ef4444\n"
            "\telif i % 3 == 1:\n"
            "\t\tPoint i*10 0\n"
            "\telse:\n"
            "\t\tSeg i*10 -3 i*10 3"
        ),
        input="9",
    ),
}
