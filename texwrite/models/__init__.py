"""
数据模型模块
"""

from .content import (
    NODE_TYPES,
    Bloc,
    Code,
    Content,
    Equation,
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
from .equation import EquationSpec

__all__ = [
    # 节点类型
    "NODE_TYPES",
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
    # 构造与操作
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
]
