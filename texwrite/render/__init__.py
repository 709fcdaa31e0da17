"""
渲染模块

负责将内容树输出为 LaTeX 正文与完整文档
"""

from .document import (
    LatexDocument,
    collect_packages,
    open_document,
    render_document,
    render_to_file,
)
from .latex import LatexRenderer, render, render_to_string
from .sink import OutputSink, StreamSink, StringSink
from .tabular import TabularLayout, column_count, column_spec, infer_layout

__all__ = [
    "LatexRenderer",
    "render",
    "render_to_string",
    "OutputSink",
    "StringSink",
    "StreamSink",
    "TabularLayout",
    "column_count",
    "column_spec",
    "infer_layout",
    "LatexDocument",
    "collect_packages",
    "open_document",
    "render_document",
    "render_to_file",
]
