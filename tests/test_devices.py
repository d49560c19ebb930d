# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import math

import pytest

from shapeforge.cli import main
from shapeforge.core import types as sf
from shapeforge.core.interpreter import interpret

cairo = pytest.importorskip("cairo")

from shapeforge.devices.common import cairo_renderer  # noqa: E402
from shapeforge.devices.png import png  # noqa: E402
from shapeforge.devices.svg import svg  # noqa: E402

SCRIPT = (
    "Point 0 0\n"
    "Line 0 0 1 1\n"
    "Seg -5 -5 5 5 #000000 diag\n"
    "Circle 2 2 3\n"
    "Poly 0 0 4 0 4 4\n"
    'Text 1 1 "label"'
)


def sample_shapes():
    result = interpret(SCRIPT, "")
    assert result.error is None
    return result.shapes


def page_device(tmp_path, name, **extra):
    pd = {
        "PageWidth": 200,
        "PageHeight": 150,
        "RenderTimeout": 1000,
        "OutputFile": str(tmp_path / name),
    }
    pd.update(extra)
    return pd


@pytest.mark.parametrize("color, rgb", [
    ("#ff0000", (1.0, 0.0, 0.0)),
    ("#0f0", (0.0, 1.0, 0.0)),
    (None, (0.0, 0.0, 0.0)),
    ("red", (0.0, 0.0, 0.0)),
    ("#zzzzzz", (0.0, 0.0, 0.0)),
])
def test_parse_color(color, rgb):
    assert cairo_renderer.parse_color(color) == pytest.approx(rgb)


def test_png_showpage(tmp_path):
    path = png.showpage(sample_shapes(), page_device(tmp_path, "out.png", ShowIds=frozenset(sf.SHAPE_TYPES)))
    with open(path, "rb") as f:
        assert f.read(8) == b"\x89PNG\r\n\x1a\n"
    surface = cairo.ImageSurface.create_from_png(path)
    assert (surface.get_width(), surface.get_height()) == (200, 150)


def test_svg_showpage(tmp_path):
    path = svg.showpage(sample_shapes(), page_device(tmp_path, "out.svg", IndexBase=1))
    with open(path) as f:
        assert "<svg" in f.read()


def test_render_shapes_with_non_finite_coordinates():
    surface = cairo.ImageSurface(cairo.FORMAT_RGB24, 50, 50)
    shapes = [sf.Point(id="P0", x=math.inf, y=0), sf.Circle(id="C0", x=0, y=0, r=math.nan),
              sf.Point(id="P1", x=1, y=1)]
    assert cairo_renderer.render_shapes(shapes, cairo.Context(surface), 50, 50)


def test_render_shapes_near_float_limit():
    result = interpret("Read a b\nPoint a 0\nPoint b 0\nLine 0 0 1 1\nLine a 0 b 1\nSeg a 0 b 0", "1e308 -1e308")
    assert result.error is None
    surface = cairo.ImageSurface(cairo.FORMAT_RGB24, 80, 60)
    assert cairo_renderer.render_shapes(result.shapes, cairo.Context(surface), 80, 60)


def test_render_shapes_when_padding_overflows():
    shapes = [sf.Point(id="P0", x=1.7e308, y=0), sf.Point(id="P1", x=-1.7e308, y=0),
              sf.Line(id="L0", p1=sf.Coord(0, 0), p2=sf.Coord(1, 1)),
              sf.Circle(id="C0", x=0, y=0, r=2)]
    surface = cairo.ImageSurface(cairo.FORMAT_RGB24, 80, 60)
    assert cairo_renderer.render_shapes(shapes, cairo.Context(surface), 80, 60)


def test_render_timeout_stops_drawing(caplog):
    surface = cairo.ImageSurface(cairo.FORMAT_RGB24, 50, 50)
    with caplog.at_level("WARNING"):
        done = cairo_renderer.render_shapes(sample_shapes(), cairo.Context(surface), 50, 50,
                                            render_timeout_ms=-1)
    assert not done
    assert "Rendering timed out" in caplog.text


def test_cli_png_output(tmp_path, capsys):
    fmt = tmp_path / "tri.fmt"
    fmt.write_text("Push 0 0\nPush 10 0\nPush 5 8\nPoly")
    out = tmp_path / "tri.png"
    assert main([str(fmt), str(tmp_path / "empty.txt"), "-o", str(out)]) == 1  # missing input file
    (tmp_path / "empty.txt").write_text("")
    assert main([str(fmt), str(tmp_path / "empty.txt"), "-o", str(out), "--show-ids", "all"]) == 0
    assert out.exists()
    assert "Wrote 1 shapes" in capsys.readouterr().err


def test_cli_svg_into_output_dir(tmp_path):
    fmt = tmp_path / "pts.fmt"
    fmt.write_text("Point 0 0\nPoint 3 4")
    (tmp_path / "in.txt").write_text("")
    outdir = tmp_path / "renders"
    assert main([str(fmt), str(tmp_path / "in.txt"), "-d", "svg", "--output-dir", str(outdir)]) == 0
    assert (outdir / "pts.svg").exists()
