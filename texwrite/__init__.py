"""
texwrite: 以节点树构建 LaTeX 文档
章节、环境、表格、公式、插图、代码 → LaTeX 源码
"""

__version__ = "0.1.0"

from .exceptions import InvalidOperationError, OutlineError, ReadFailureError, TexwriteError
from .models import (
    Bloc,
    Code,
    Content,
    Equation,
    EquationSpec,
    Graphic,
    Math,
    Node,
    RawText,
    Section,
    SectionLevel,
    Tabular,
    Tag,
    TextFromFile,
    add,
    bloc,
    code,
    enumeration,
    equation,
    escaped_text,
    graphic,
    item,
    itemize,
    math,
    paragraph,
    section,
    subsection,
    subsubsection,
    tabular,
    tag,
    text,
    text_from_file,
    walk,
)
from .config import AppConfig, DocumentConfig, RenderOptions, load_config, load_outline
from .render import (
    LatexDocument,
    LatexRenderer,
    OutputSink,
    StringSink,
    open_document,
    render,
    render_document,
    render_to_file,
    render_to_string,
)

__all__ = [
    # 版本
    "__version__",
    # 异常
    "TexwriteError",
    "InvalidOperationError",
    "ReadFailureError",
    "OutlineError",
    # 节点
    "Node",
    "Content",
    "Section",
    "SectionLevel",
    "RawText",
    "Equation",
    "EquationSpec",
    "Bloc",
    "Tag",
    "Tabular",
    "Math",
    "Graphic",
    "Code",
    "TextFromFile",
    # 构造
    "add",
    "walk",
    "section",
    "subsection",
    "subsubsection",
    "paragraph",
    "text",
    "escaped_text",
    "equation",
    "bloc",
    "tag",
    "item",
    "itemize",
    "enumeration",
    "tabular",
    "math",
    "graphic",
    "code",
    "text_from_file",
    # 配置
    "AppConfig",
    "DocumentConfig",
    "RenderOptions",
    "load_config",
    "load_outline",
    # 渲染
    "LatexRenderer",
    "LatexDocument",
    "OutputSink",
    "StringSink",
    "render",
    "render_to_string",
    "render_document",
    "render_to_file",
    "open_document",
]
