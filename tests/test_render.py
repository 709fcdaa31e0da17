"""
测试 LaTeX 正文渲染
"""

from pathlib import Path

import pytest

from texwrite import (
    LatexRenderer,
    ReadFailureError,
    RenderOptions,
    StringSink,
    bloc,
    code,
    equation,
    graphic,
    item,
    itemize,
    math,
    paragraph,
    render,
    render_to_string,
    section,
    subsubsection,
    text,
    text_from_file,
)
from texwrite.models import NODE_TYPES


def test_every_node_type_has_a_renderer():
    renderer = LatexRenderer()
    assert set(renderer._dispatch) == set(NODE_TYPES)


def test_itemize_countries():
    countries = bloc("itemize")
    for country in ["France", "UK", "Germany", "Italy"]:
        countries.add(item(text(country)))

    assert render_to_string(countries) == (
        "\\begin{itemize}\n"
        "\\item France\n"
        "\\item UK\n"
        "\\item Germany\n"
        "\\item Italy\n"
        "\\end{itemize}\n"
    )


def test_section_with_children_in_order():
    sec = section("Examples", text("Here is some countries in Europe"), itemize("France"))
    assert render_to_string(sec) == (
        "\\section{Examples}\n"
        "Here is some countries in Europe\n"
        "\\begin{itemize}\n"
        "\\item France\n"
        "\\end{itemize}\n"
    )


def test_section_levels_are_not_validated():
    node = paragraph("P", subsubsection("Deep"))
    assert render_to_string(node) == "\\paragraph{P}\n\\subsubsection{Deep}\n"


def test_child_count_matches_adds():
    sec = section("S")
    for i in range(5):
        sec.add(text(f"line {i}"))
    lines = render_to_string(sec).splitlines()
    assert lines[1:] == [f"line {i}" for i in range(5)]


def test_raw_text_is_not_escaped():
    assert render_to_string(text(r"50% of \emph{x} & y")) == "50% of \\emph{x} & y\n"


def test_render_is_idempotent():
    tree = section("A", bloc("center", text("x"), text("y")), text("z"))
    sink = StringSink()
    render(tree, sink)
    first = sink.getvalue()
    assert render_to_string(tree) == first
    assert render_to_string(tree) == first


def test_render_writes_to_sink():
    sink = StringSink()
    render(text("hello"), sink)
    render(text("world"), sink)
    assert sink.getvalue() == "hello\nworld\n"


def test_bloc_options():
    node = bloc("figure", text("x"), options="htbp")
    assert render_to_string(node) == "\\begin{figure}[htbp]\nx\n\\end{figure}\n"


def test_inline_and_display_math():
    assert render_to_string(math("x^2")) == "$x^2$\n"
    assert render_to_string(math("x^2", display=True)) == "\\[ x^2 \\]\n"


def test_graphic_without_scale():
    output = render_to_string(graphic("img/plot.png", "A plot"))
    assert "scale" not in output
    assert "\\includegraphics{img/plot.png}" in output
    assert "\\caption{A plot}" in output


def test_graphic_with_scale():
    output = render_to_string(graphic("img/plot.png", "A plot", scale=0.5))
    assert output.count("scale=") == 1
    assert "\\includegraphics[scale=0.5]{img/plot.png}" in output


def test_graphic_unit_scale_is_emitted():
    output = render_to_string(graphic("a.png", scale=1.0))
    assert "\\includegraphics[scale=1.0]{a.png}" in output


@pytest.mark.parametrize(
    "scale, expected",
    [
        (0.1234567, "scale=0.1234567"),
        (1e-5, "scale=0.00001"),
        (2.5, "scale=2.5"),
    ],
)
def test_graphic_scale_keeps_full_precision(scale, expected):
    output = render_to_string(graphic("a.png", scale=scale))
    assert f"\\includegraphics[{expected}]{{a.png}}" in output
    assert "e-" not in output


def test_graphic_without_caption_omits_caption():
    output = render_to_string(graphic("a.png"))
    assert "\\caption" not in output
    assert output.endswith("\\includegraphics{a.png}\n\\end{figure}\n")


def test_graphic_layout_options():
    options = RenderOptions(figure_placement=None, center_figures=False)
    assert render_to_string(graphic("a.png", "c"), options) == (
        "\\begin{figure}\n"
        "\\includegraphics{a.png}\n"
        "\\caption{c}\n"
        "\\end{figure}\n"
    )


def test_code_listing():
    output = render_to_string(code("src/main.py", "Python"))
    assert output == "\\lstinputlisting[language=Python]{src/main.py}\n"


def test_code_does_not_read_file(tmp_path: Path):
    missing = tmp_path / "nope.rs"
    assert "nope.rs" in render_to_string(code(missing, "Rust"))


def test_equation_single_line_with_label():
    output = render_to_string(equation("E = mc^2", label="eq:energy"))
    assert output == "\\begin{equation}\n\\label{eq:energy}\nE = mc^2\n\\end{equation}\n"


def test_equation_multiline_unnumbered():
    output = render_to_string(equation("a &= b", "c &= d", numbered=False))
    assert output == "\\begin{align*}\na &= b \\\\\nc &= d\n\\end{align*}\n"


def test_text_from_file_reads_at_render_time(tmp_path: Path):
    source = tmp_path / "intro.tex"
    node = text_from_file(source)

    source.write_text("first version", encoding="utf-8")
    assert render_to_string(node) == "first version\n"

    source.write_text("second version", encoding="utf-8")
    assert render_to_string(node) == "second version\n"


def test_text_from_file_matches_raw_text(tmp_path: Path):
    source = tmp_path / "body.tex"
    source.write_text("Some \\textbf{content}\n", encoding="utf-8")
    assert render_to_string(text_from_file(source)) == render_to_string(text("Some \\textbf{content}\n"))


def test_text_from_file_missing_raises(tmp_path: Path):
    node = text_from_file(tmp_path / "missing.tex")
    with pytest.raises(ReadFailureError) as exc_info:
        render_to_string(node)
    assert exc_info.value.path.endswith("missing.tex")
    assert isinstance(exc_info.value.__cause__, OSError)


def test_missing_file_fails_enclosing_container(tmp_path: Path):
    sec = section("Intro", text("before"), text_from_file(tmp_path / "missing.tex"), text("after"))
    sink = StringSink()
    with pytest.raises(ReadFailureError):
        render(sec, sink)
    # 已写入的内容不回滚，但失败节点之后的内容不会输出
    assert "after" not in sink.getvalue()


def test_unknown_node_type_rejected():
    with pytest.raises(TypeError):
        LatexRenderer().render("not a node", StringSink())
