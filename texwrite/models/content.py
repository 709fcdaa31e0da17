"""
内容节点定义：Section, Bloc, Tabular 等

所有节点组成一棵树，由容器节点独占持有其子节点。
Content 是封闭的可辨识联合类型（按 kind 字段区分），渲染器对其做穷尽分派。
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..exceptions import InvalidOperationError
from ..utils.escape import escape_latex
from .equation import EquationSpec


class SectionLevel(str, Enum):
    """标题层级"""
    SECTION = "section"
    SUBSECTION = "subsection"
    SUBSUBSECTION = "subsubsection"
    PARAGRAPH = "paragraph"

    @property
    def command(self) -> str:
        """对应的 LaTeX 命令（不含反斜杠）"""
        return self.value


class Node(BaseModel):
    """
    内容节点基类

    只有 Section 和 Bloc 支持 add，其余节点调用 add 会抛出 InvalidOperationError，
    且不会修改节点本身。

    每个节点最多属于一个父节点：已挂到树上的节点不能再次添加到任何容器。
    """

    # 只记录是否已有父节点，不保存父节点引用（树只能自顶向下访问）
    _attached: bool = PrivateAttr(default=False)

    def model_post_init(self, __context: Any) -> None:
        # 通过构造参数传入的子节点（children / child / rows）同样归本节点所有
        _claim(self, self.children_nodes)

    def add(self, child: Node) -> None:
        """添加子节点（仅容器节点支持）"""
        raise InvalidOperationError(self.kind)  # type: ignore[attr-defined]

    @property
    def children_nodes(self) -> list[Node]:
        """直接子节点，按渲染顺序"""
        return []


class _Container(Node):
    """持有有序子节点序列的节点"""

    def add(self, child: Node) -> None:
        self.children.extend(_claim(self, [child]))  # type: ignore[attr-defined]

    @property
    def children_nodes(self) -> list[Node]:
        return list(self.children)  # type: ignore[attr-defined]


class Section(_Container):
    """章节：标题指令 + 子节点"""
    kind: Literal["section"] = "section"
    level: SectionLevel = Field(default=SectionLevel.SECTION, description="标题层级")
    title: str = Field(..., description="标题文本")
    children: list[Content] = Field(default_factory=list, description="子节点列表")


class Bloc(_Container):
    """环境块：\\begin{name} ... \\end{name}"""
    kind: Literal["bloc"] = "bloc"
    name: str = Field(..., description="环境名，如 itemize, abstract")
    options: str | None = Field(default=None, description="环境可选参数，渲染为 [options]")
    children: list[Content] = Field(default_factory=list, description="子节点列表")


class RawText(Node):
    """原样输出的文本，不做任何转义"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["raw_text"] = "raw_text"
    text: str


class Equation(Node):
    """公式"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["equation"] = "equation"
    spec: EquationSpec


class Tag(Node):
    """标记 + 单个子节点，如列表项 \\item"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["tag"] = "tag"
    marker: str = Field(..., description="输出在子节点前的标记文本")
    child: Content

    @property
    def children_nodes(self) -> list[Node]:
        return [self.child]


class Tabular(Node):
    """
    表格：由若干行单元格组成，允许各行长度不同

    不支持 add；追加行请使用 add_row。
    """
    kind: Literal["tabular"] = "tabular"
    rows: list[list[Content]] = Field(default_factory=list, description="行列表")

    def add_row(self, cells: Iterable[Any]) -> None:
        """追加一行，非节点的值会转换为 RawText"""
        if isinstance(cells, (str, bytes)):
            raise TypeError("表格行必须是单元格序列，而不是字符串")
        self.rows.append(_claim(self, [_as_node(cell) for cell in cells]))

    @property
    def children_nodes(self) -> list[Node]:
        return [cell for row in self.rows for cell in row]


class Math(Node):
    """数学公式源码，默认行内"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["math"] = "math"
    source: str
    display: bool = Field(default=False, description="是否使用行间公式 \\[ \\]")


class Graphic(Node):
    """插图"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["graphic"] = "graphic"
    path: str = Field(..., description="图片路径")
    caption: str = Field(default="", description="图片标题")
    scale: float | None = Field(default=None, description="缩放比例，None 表示不输出 scale")


class Code(Node):
    """代码文件引用（渲染时不读取文件）"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["code"] = "code"
    path: str
    language: str


class TextFromFile(Node):
    """外部文本文件，仅在渲染时读取"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["text_from_file"] = "text_from_file"
    path: str


NODE_TYPES: tuple[type[Node], ...] = (
    Section,
    RawText,
    Equation,
    Bloc,
    Tag,
    Tabular,
    Math,
    Graphic,
    Code,
    TextFromFile,
)

Content = Annotated[
    Union[Section, RawText, Equation, Bloc, Tag, Tabular, Math, Graphic, Code, TextFromFile],
    Field(discriminator="kind"),
]

for _model in NODE_TYPES:
    _model.model_rebuild()


def _claim(parent: Node, children: list[Any]) -> list[Node]:
    """
    检查并登记子节点归属

    全部检查通过后才标记为已挂载，任何一项失败都不会改动节点。

    Raises:
        TypeError: 子节点不是内容节点
        ValueError: 子节点已有父节点、重复出现，或会形成环
    """
    seen: set[int] = set()
    for child in children:
        if not isinstance(child, Node):
            raise TypeError(f"子节点必须是内容节点，而不是 {type(child).__name__}")
        if child._attached or id(child) in seen:
            raise ValueError(f"节点已属于其他容器: {child.kind}")  # type: ignore[attr-defined]
        # 父节点不能出现在子树中
        if any(node is parent for node in walk(child)):
            raise ValueError("不能将节点添加到其自身的子树中")
        seen.add(id(child))
    for child in children:
        child._attached = True
    return children


def _as_node(value: Any) -> Node:
    if isinstance(value, Node):
        return value
    return RawText(text=str(value))


def _is_row(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def walk(node: Node) -> Iterator[Node]:
    """先序遍历整棵树"""
    yield node
    for child in node.children_nodes:
        yield from walk(child)


def add(node: Node, child: Node) -> None:
    """向容器节点追加子节点，非容器节点抛出 InvalidOperationError"""
    node.add(child)


# ---------------------------------------------------------------------------
# 构造函数
# ---------------------------------------------------------------------------

def section(title: str, *children: Node, level: SectionLevel = SectionLevel.SECTION) -> Section:
    node = Section(title=title, level=level)
    for child in children:
        node.add(child)
    return node


def subsection(title: str, *children: Node) -> Section:
    return section(title, *children, level=SectionLevel.SUBSECTION)


def subsubsection(title: str, *children: Node) -> Section:
    return section(title, *children, level=SectionLevel.SUBSUBSECTION)


def paragraph(title: str, *children: Node) -> Section:
    return section(title, *children, level=SectionLevel.PARAGRAPH)


def text(value: str) -> RawText:
    return RawText(text=value)


def escaped_text(value: str) -> RawText:
    """转义 LaTeX 特殊字符后的文本"""
    return RawText(text=escape_latex(value))


def equation(*lines: str, label: str | None = None, numbered: bool = True) -> Equation:
    return Equation(spec=EquationSpec(lines=list(lines), label=label, numbered=numbered))


def bloc(name: str, *children: Node, options: str | None = None) -> Bloc:
    node = Bloc(name=name, options=options)
    for child in children:
        node.add(child)
    return node


def tag(marker: str, child: Any) -> Tag:
    return Tag(marker=marker, child=_as_node(child))


def item(child: Any) -> Tag:
    """列表项"""
    return tag(r"\item", child)


def itemize(*entries: Any) -> Bloc:
    """无序列表，每个条目包装为 \\item"""
    return bloc("itemize", *(item(entry) for entry in entries))


def enumeration(*entries: Any) -> Bloc:
    """有序列表"""
    return bloc("enumerate", *(item(entry) for entry in entries))


def tabular(data: Iterable[Any] = ()) -> Tabular:
    """
    创建表格

    Args:
        data: 一维序列（视为单行）或二维序列（每个元素为一行）；
              非节点的值会转换为 RawText

    Returns:
        Tabular 节点
    """
    items = list(data)
    row_flags = [_is_row(value) for value in items]
    node = Tabular()
    if items and all(row_flags):
        for row in items:
            node.add_row(row)
    elif any(row_flags):
        raise ValueError("表格数据不能混合行与单元格")
    elif items:
        node.add_row(items)
    return node


def math(source: str, display: bool = False) -> Math:
    return Math(source=source, display=display)


def graphic(path: str | Path, caption: str = "", scale: float | None = None) -> Graphic:
    return Graphic(path=str(path), caption=caption, scale=scale)


def code(path: str | Path, language: str) -> Code:
    return Code(path=str(path), language=language)


def text_from_file(path: str | Path) -> TextFromFile:
    return TextFromFile(path=str(path))
