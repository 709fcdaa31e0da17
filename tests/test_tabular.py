"""
测试表格布局推断与渲染
"""

import pytest

from texwrite import RenderOptions, Tabular, math, render_to_string, tabular, text
from texwrite.render import column_count, column_spec, infer_layout


@pytest.mark.parametrize(
    "rows, expected",
    [
        ([], 1),
        ([[]], 1),
        ([[1, 2, 3]], 3),
        ([[1], [1, 2, 3, 4], [1, 2]], 4),
    ],
)
def test_column_count(rows, expected):
    assert column_count(rows) == expected


def test_column_spec():
    assert column_spec(3) == "|c|c|c|"
    assert column_spec(2, "l", borders=False) == "ll"
    with pytest.raises(ValueError):
        column_spec(0)


def test_infer_layout_uses_longest_row():
    layout = infer_layout([[1], [1, 2]], align="r")
    assert layout.columns == 2
    assert layout.spec == "|r|r|"


def test_numeric_grid():
    output = render_to_string(tabular([[0, 1, 2], [1, 2, 3]]))
    assert output == (
        "\\begin{tabular}{|c|c|c|}\n"
        "\\hline\n"
        "0 & 1 & 2 \\\\\n"
        "\\hline\n"
        "1 & 2 & 3 \\\\\n"
        "\\hline\n"
        "\\end{tabular}\n"
    )


def test_flat_sequence_renders_as_single_row():
    assert render_to_string(tabular(["a", "b", "c"])) == render_to_string(tabular([["a", "b", "c"]]))


def test_jagged_rows_are_not_padded():
    options = RenderOptions(tabular_borders=False)
    output = render_to_string(tabular([[1, 2, 3], [4]]), options)
    assert output == (
        "\\begin{tabular}{ccc}\n"
        "1 & 2 & 3 \\\\\n"
        "4 \\\\\n"
        "\\end{tabular}\n"
    )


def test_empty_tabular():
    assert render_to_string(Tabular()) == "\\begin{tabular}{|c|}\n\\hline\n\\end{tabular}\n"
    options = RenderOptions(tabular_borders=False)
    assert render_to_string(tabular([]), options) == "\\begin{tabular}{c}\n\\end{tabular}\n"


def test_cells_are_rendered_nodes():
    t = tabular([[math("x^2"), text("y")]])
    assert "$x^2$ & y \\\\" in render_to_string(t)


def test_column_alignment_option():
    output = render_to_string(tabular([[1, 2]]), RenderOptions(column_align="l"))
    assert output.startswith("\\begin{tabular}{|l|l|}\n")
