"""
LaTeX 渲染器

将内容节点树递归输出为 LaTeX 正文
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal
from pathlib import Path
from typing import Any

from ..config import RenderOptions
from ..exceptions import ReadFailureError
from ..models import (
    NODE_TYPES,
    Bloc,
    Code,
    Equation,
    Graphic,
    Math,
    Node,
    RawText,
    Section,
    Tabular,
    Tag,
    TextFromFile,
)
from .sink import OutputSink, StringSink
from .tabular import HLINE, format_row, infer_layout

logger = logging.getLogger(__name__)


def _format_scale(scale: float) -> str:
    # 定点小数，保留完整精度
    return format(Decimal(repr(scale)), "f")


class LatexRenderer:
    """
    LaTeX 渲染器

    每种节点类型对应一个渲染方法；构造时检查 NODE_TYPES 中的每种类型都有渲染方法。
    渲染只读取节点树，可重复调用。
    """

    def __init__(self, options: RenderOptions | None = None):
        """
        初始化渲染器

        Args:
            options: 渲染选项，默认使用 RenderOptions()
        """
        self.options = options or RenderOptions()
        self._dispatch: dict[type[Node], Callable[[Any, OutputSink], None]] = {
            Section: self._render_section,
            RawText: self._render_raw_text,
            Equation: self._render_equation,
            Bloc: self._render_bloc,
            Tag: self._render_tag,
            Tabular: self._render_tabular,
            Math: self._render_math,
            Graphic: self._render_graphic,
            Code: self._render_code,
            TextFromFile: self._render_text_from_file,
        }
        missing = [t.__name__ for t in NODE_TYPES if t not in self._dispatch]
        if missing:
            raise TypeError(f"缺少节点渲染方法: {', '.join(missing)}")

    def render(self, node: Node, sink: OutputSink) -> None:
        """
        将节点及其子树渲染到输出目标

        子树中任何错误都会中止渲染并向上传播；已写入输出目标的内容不会回滚。

        Args:
            node: 根节点
            sink: 输出目标
        """
        handler = self._dispatch.get(type(node))
        if handler is None:
            raise TypeError(f"未知的节点类型: {type(node).__name__}")
        handler(node, sink)

    def render_to_string(self, node: Node) -> str:
        """渲染到内存并返回字符串，出错时不产生任何输出"""
        sink = StringSink()
        self.render(node, sink)
        return sink.getvalue()

    def _render_children(self, children: list[Node], sink: OutputSink) -> None:
        for child in children:
            self.render(child, sink)

    def _render_section(self, node: Section, sink: OutputSink) -> None:
        sink.write_line(f"\\{node.level.command}{{{node.title}}}")
        self._render_children(node.children, sink)

    def _render_raw_text(self, node: RawText, sink: OutputSink) -> None:
        sink.write_line(node.text)

    def _render_equation(self, node: Equation, sink: OutputSink) -> None:
        spec = node.spec
        env = spec.environment
        sink.write_line(f"\\begin{{{env}}}")
        if spec.label:
            sink.write_line(f"\\label{{{spec.label}}}")
        last = len(spec.lines) - 1
        for i, line in enumerate(spec.lines):
            sink.write_line(line + (r" \\" if i < last else ""))
        sink.write_line(f"\\end{{{env}}}")

    def _render_bloc(self, node: Bloc, sink: OutputSink) -> None:
        options = f"[{node.options}]" if node.options else ""
        sink.write_line(f"\\begin{{{node.name}}}{options}")
        self._render_children(node.children, sink)
        sink.write_line(f"\\end{{{node.name}}}")

    def _render_tag(self, node: Tag, sink: OutputSink) -> None:
        sink.write_fragment(f"{node.marker} ")
        self.render(node.child, sink)

    def _render_cell(self, cell: Node) -> str:
        return self.render_to_string(cell).rstrip("\n")

    def _render_tabular(self, node: Tabular, sink: OutputSink) -> None:
        layout = infer_layout(node.rows, self.options.column_align, self.options.tabular_borders)
        sink.write_line(f"\\begin{{tabular}}{{{layout.spec}}}")
        if layout.borders:
            sink.write_line(HLINE)
        for row in node.rows:
            sink.write_line(format_row([self._render_cell(cell) for cell in row]))
            if layout.borders:
                sink.write_line(HLINE)
        sink.write_line("\\end{tabular}")

    def _render_math(self, node: Math, sink: OutputSink) -> None:
        if node.display:
            sink.write_line(f"\\[ {node.source} \\]")
        else:
            sink.write_line(f"${node.source}$")

    def _render_graphic(self, node: Graphic, sink: OutputSink) -> None:
        placement = f"[{self.options.figure_placement}]" if self.options.figure_placement else ""
        sink.write_line(f"\\begin{{figure}}{placement}")
        if self.options.center_figures:
            sink.write_line("\\centering")
        # scale 为 None 时不输出缩放参数（与 scale=1.0 区分）
        scale = f"[scale={_format_scale(node.scale)}]" if node.scale is not None else ""
        sink.write_line(f"\\includegraphics{scale}{{{node.path}}}")
        if node.caption:
            sink.write_line(f"\\caption{{{node.caption}}}")
        sink.write_line("\\end{figure}")

    def _render_code(self, node: Code, sink: OutputSink) -> None:
        sink.write_line(f"\\lstinputlisting[language={node.language}]{{{node.path}}}")

    def _render_text_from_file(self, node: TextFromFile, sink: OutputSink) -> None:
        path = Path(node.path)
        logger.debug("读取文本文件: %s", path)
        try:
            content = path.read_text(encoding=self.options.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFailureError(node.path, str(e)) from e
        self._render_raw_text(RawText(text=content), sink)


def render(node: Node, sink: OutputSink, options: RenderOptions | None = None) -> None:
    """渲染节点到输出目标"""
    LatexRenderer(options).render(node, sink)


def render_to_string(node: Node, options: RenderOptions | None = None) -> str:
    """渲染节点为字符串"""
    return LatexRenderer(options).render_to_string(node)
