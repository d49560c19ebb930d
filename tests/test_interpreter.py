# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from shapeforge.core import error as sf_error
from shapeforge.core import types as sf
from shapeforge.core.context_init import create_context
from shapeforge.core.interpreter import interpret, run_script


def run(format_script, input_data=""):
    return interpret(format_script, input_data, 1000)


def points(result):
    assert result.error is None
    return [(s.x, s.y) for s in result.shapes if isinstance(s, sf.Point)]


def expect_single_point(result, x, y):
    assert result.error is None
    assert len(result.shapes) == 1
    shape = result.shapes[0]
    assert shape.TYPE == sf.T_POINT
    assert (shape.x, shape.y) == (x, y)


def expect_error(result, fragment):
    assert result.shapes == []
    assert result.error is not None
    assert fragment in result.error


# ----------------------------------------------------------------------
# control flow
# ----------------------------------------------------------------------

IF_CHAIN = """Read n
if n % 2 == 0:
  Point n 0
elif n % 3 == 0:
  Point n 10
else:
  Point n 20"""


@pytest.mark.parametrize("n, y", [(6, 0), (9, 10), (7, 20)])
def test_if_elif_else_selects_one_branch(n, y):
    expect_single_point(run(IF_CHAIN, str(n)), n, y)


def test_else_if_is_an_alias_for_elif():
    script = """Read n
if n == 0:
  Point 0 0
else if n == 1:
  Point 1 1
else:
  Point 2 2"""
    expect_single_point(run(script, "1"), 1, 1)


def test_logical_operators_in_conditions():
    script = """Read a b
if a < b && !(a == 0):
  Point 1 1
else:
  Point 2 2"""
    expect_single_point(run(script, "1 2"), 1, 1)
    expect_single_point(run(script, "0 2"), 2, 2)


def test_if_without_else_and_false_condition_emits_nothing():
    result = run("if 0:\n  Point 1 1\nPoint 2 2")
    assert points(result) == [(2, 2)]


def test_consecutive_ifs_are_separate_chains():
    script = "if 1:\n  Point 0 0\nif 1:\n  Point 1 1"
    assert points(run(script)) == [(0, 0), (1, 1)]


def test_break_exits_the_nearest_loop():
    script = """Read n
rep i n:
  if i == 2:
    break
  Point i i"""
    assert points(run(script, "5")) == [(0, 0), (1, 1)]


def test_continue_skips_to_the_next_iteration():
    script = """Read n
rep i n:
  if i % 2 == 0:
    continue
  Point i i"""
    assert points(run(script, "5")) == [(1, 1), (3, 3)]


def test_break_and_continue_only_affect_the_nearest_loop():
    script = """Read n
rep i n:
  rep j n:
    if j == 1:
      continue
    if j == 2:
      break
    Point i j"""
    assert points(run(script, "3")) == [(0, 0), (1, 0), (2, 0)]


def test_break_inside_group_leaves_the_loop_and_restores_group():
    script = """rep i 5:
  group "g":
    if i == 1:
      break
    Point i 0
Point 9 9"""
    result = run(script)
    assert [s.group_id for s in result.shapes] == ["g", None]


@pytest.mark.parametrize("keyword", ["break", "continue"])
def test_loop_exit_outside_a_loop(keyword):
    expect_error(run(keyword), "outside of a loop")


@pytest.mark.parametrize("keyword", ["break", "continue"])
def test_loop_exit_in_if_outside_a_loop(keyword):
    expect_error(run(f"if 1:\n  {keyword}"), "outside of a loop")


@pytest.mark.parametrize("script", ["rep i 1:\n  break 1", "rep i 1:\n  continue x"])
def test_loop_exit_takes_no_arguments(script):
    expect_error(run(script), "does not take any arguments")


def test_arguments_are_checked_before_loop_context():
    expect_error(run("break now"), "'break' does not take any arguments.")


@pytest.mark.parametrize("script, message", [
    ("elif 1:\n  Point 0 0", "'elif' without matching 'if'."),
    ("else:\n  Point 0 0", "'else' without matching 'if'."),
    ("else if 1:\n  Point 0 0", "'else if' without matching 'if'."),
    ("Point 0 0\nelse:\n  Point 1 1", "'else' without matching 'if'."),
])
def test_orphan_branches(script, message):
    expect_error(run(script), message)


def test_conditional_header_errors():
    expect_error(run("if:\n  Point 0 0"), "requires a condition")
    expect_error(run("if 1\n  Point 0 0"), "must end with ':'")
    expect_error(run("if 1:\n  Point 0 0\nelif 1\n  Point 1 1"), "must end with ':'")
    expect_error(run("if 0:\n  Point 0 0\nelse 1:\n  Point 1 1"), "cannot have a condition")
    expect_error(run("if 0:\n  Point 0 0\nelse\n  Point 1 1"), "else statement must end with ':'")


def test_chained_comparison_is_rejected():
    expect_error(run("if 1 < 2 < 3:\n  Point 0 0"), "Unexpected token")


def test_branches_after_the_taken_one_are_still_validated():
    expect_error(run("if 1:\n  Point 0 0\nelif:\n  Point 1 1"), "requires a condition")


# ----------------------------------------------------------------------
# rep
# ----------------------------------------------------------------------

def test_rep_with_count_only():
    result = run("rep 3:\n  Point 1 1")
    assert len(result.shapes) == 3


def test_rep_count_expression_with_spaces():
    result = run("Read a b\nrep a + b:\n  Point 0 0", "2 1")
    assert len(result.shapes) == 3


def test_rep_induction_variable_counts_from_zero():
    assert points(run("rep i 3:\n  Point i 0")) == [(0, 0), (1, 0), (2, 0)]


def test_rep_count_is_evaluated_once():
    script = "Read n\nrep n:\n  Read n\n  Point n 0"
    assert points(run(script, "2 5 6")) == [(5, 0), (6, 0)]


@pytest.mark.parametrize("count, iterations", [("0", 0), ("-2", 0), ("2.9", 2), ("0/0", 0)])
def test_rep_count_truncation(count, iterations):
    assert len(run(f"rep {count}:\n  Point 0 0").shapes) == iterations


def test_rep_header_errors():
    expect_error(run("rep 3\n  Point 0 0"), "rep statement must end with ':'")
    expect_error(run("rep:\n  Point 0 0"), "rep statement requires a count.")
    expect_error(run("rep 1 x y:\n  Point 0 0"), "Invalid rep statement")
    expect_error(run("rep point 3:\n  Point 0 0"), "Invalid rep statement")


def test_rep_undefined_count():
    expect_error(run("rep n:\n  Point 0 0"), "Undefined variable or invalid number: 'n'")


def test_rep_without_body():
    expect_error(run("rep 2:\nPoint 0 0"), 'Indentation Error: Expected an indented block after "rep 2:"')


def test_infinite_rep_times_out():
    result = interpret("rep 1/0:\n  Point 0 0", "", 20)
    expect_error(result, "Execution timed out (> 20ms)")


# ----------------------------------------------------------------------
# scoping
# ----------------------------------------------------------------------

def test_outer_variable_keeps_value_assigned_in_loop():
    script = "Read a\nrep 2:\n  Read a\nPoint a 0"
    assert points(run(script, "1 2 3")) == [(3, 0)]


def test_variable_created_in_iteration_vanishes():
    # b is undefined after the loop so "Point b 0" has one number only
    script = "rep 2:\n  Read b\nPoint b 0\nPoint 1 1"
    assert points(run(script, "4 5")) == [(1, 1)]


def test_loop_variable_is_not_visible_after_loop():
    result = run("rep i 2:\n  Point 0 0\nrep i:\n  Point 1 1")
    expect_error(result, "Undefined variable or invalid number: 'i'")


def test_iteration_variables_do_not_leak_between_iterations():
    script = """rep i 2:
  if i == 1:
    Point seen 0
  Read seen"""
    # the second iteration cannot see "seen" from the first
    assert points(run(script, "7 8")) == []


def test_scopes_are_balanced_after_break_and_errors():
    ctxt = create_context("1 2 3")
    run_script(ctxt, "rep i 3:\n  rep j 3:\n    if j == 1:\n      break\n  continue")
    assert ctxt.scopes == [{}]
    assert ctxt.loop_depth == 0


# ----------------------------------------------------------------------
# groups
# ----------------------------------------------------------------------

def test_nested_groups_restore_previous_id():
    script = """group 1:
  Point 0 0
  group "a":
    Point 1 1
  Point 2 2
Point 3 3"""
    result = run(script)
    assert [s.group_id for s in result.shapes] == ["1", "a", "1", None]


def test_group_id_is_formatted_like_a_number():
    result = run("Read n\ngroup n / 2:\n  Point 0 0\ngroup 1/0:\n  Point 1 1", "5")
    assert [s.group_id for s in result.shapes] == ["2.5", "Infinity"]


def test_group_id_uses_exponent_for_large_and_tiny_numbers():
    result = run("Read big small\ngroup big:\n  Point 0 0\ngroup small:\n  Point 1 1\ngroup big / 10:\n  Point 2 2",
                 "1e21 0.0000001")
    assert [s.group_id for s in result.shapes] == ["1e+21", "1e-7", "100000000000000000000"]


def test_group_with_loop_variable():
    result = run("rep i 2:\n  group i:\n    Point i 0")
    assert [s.group_id for s in result.shapes] == ["0", "1"]


def test_group_errors():
    expect_error(run("group 1\n  Point 0 0"), "Group statement must end with ':'")
    expect_error(run("group x:\n  Point 0 0"), 'Invalid Group ID: "x"')


# ----------------------------------------------------------------------
# statements, indentation, input
# ----------------------------------------------------------------------

def test_keywords_are_case_insensitive():
    result = run("READ n\nREP I n:\n  POINT I 0\nIF 1:\n  circle 0 0 1\nELSE:\n  Point 9 9", "2")
    assert [s.TYPE for s in result.shapes] == [sf.T_POINT, sf.T_POINT, sf.T_CIRCLE]


def test_comments_and_blank_lines_are_ignored():
    script = "// header\n\nrep 2:\n\n  // inside\n  Point 1 1 // trailing\n\nPoint 2 2"
    assert points(run(script)) == [(1, 1), (1, 1), (2, 2)]


def test_tab_and_space_indentation_mix():
    result = run("rep 2:\n\tPoint 0 0\n    Point 1 1")
    assert len(result.shapes) == 4


def test_line_indented_too_much():
    expect_error(run("Point 0 0\n  Point 1 1"), 'Indentation Error: Line "Point 1 1" is indented too much.')


def test_inconsistent_dedent_inside_block():
    expect_error(run("rep 2:\n    Point 0 0\n      Point 1 1"), "is indented too much")


def test_unknown_command():
    expect_error(run("Square 1 2"), "Syntax Error: Unknown command 'Square'")


def test_read_errors():
    expect_error(run("Read x"), "Unexpected end of input")
    expect_error(run("Read x", "abc"), "Expected number, found 'abc'")
    expect_error(run("Read rep", "1"), "'rep' is a reserved keyword and cannot be used as a variable name.")
    expect_error(run("Read 1x", "1"), "'1x' is not a valid variable name.")


def test_error_discards_shapes_already_emitted():
    expect_error(run("Point 0 0\nRead x"), "Unexpected end of input")


def test_input_spans_lines_freely():
    script = "Read n\nrep n:\n  Read x y\n  Point x y"
    assert points(run(script, "2 1\n2 3 4")) == [(1, 2), (3, 4)]


def test_interpret_is_idempotent():
    script = "Read n\nrep i n:\n  Point i i\n  Circle i 0 1"
    assert run(script, "4") == run(script, "4")


def test_run_script_raises_script_errors():
    ctxt = create_context("")
    with pytest.raises(sf_error.ScriptSyntaxError):
        run_script(ctxt, "Square 1 2")


def test_default_polygon_snippet():
    from shapeforge.core.snippets import SNIPPETS

    snippet = SNIPPETS["default"]
    result = run(snippet.format, snippet.input)
    assert result.error is None
    polygons = [s for s in result.shapes if s.TYPE == sf.T_POLYGON]
    assert [len(p.points) for p in polygons] == [3, 4]


@pytest.mark.parametrize("name", ["default", "points", "segments", "circles", "polygon_simple",
                                  "lines", "groups", "control_flow"])
def test_snippets_run_cleanly(name):
    from shapeforge.core.snippets import SNIPPETS

    snippet = SNIPPETS[name]
    result = run(snippet.format, snippet.input)
    assert result.error is None
    assert result.shapes
