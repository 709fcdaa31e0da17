"""
配置管理模块
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from ..exceptions import OutlineError
from ..models import (
    Node,
    SectionLevel,
    bloc,
    code,
    enumeration,
    equation,
    escaped_text,
    graphic,
    item,
    itemize,
    math,
    section,
    tabular,
    text,
    text_from_file,
)


class PackageSpec(BaseModel):
    """宏包声明"""
    name: str = Field(..., description="宏包名，如 graphicx")
    options: list[str] = Field(default_factory=list, description="宏包选项")


class DocumentConfig(BaseModel):
    """文档级配置：导言区与标题信息"""
    title: str | None = Field(default=None, description="文档标题")
    author: str | None = Field(default=None, description="作者")
    date: str | None = Field(default=r"\today", description="日期，None 表示不输出 \\date")
    document_class: str = Field(default="article", description="文档类")
    class_options: list[str] = Field(default_factory=lambda: ["12pt", "a4paper"], description="文档类选项")
    packages: list[PackageSpec] = Field(default_factory=list, description="额外声明的宏包")
    auto_packages: bool = Field(default=True, description="是否根据内容自动添加所需宏包")


class RenderOptions(BaseModel):
    """渲染选项"""
    column_align: Literal["l", "c", "r"] = Field(default="c", description="表格列对齐方式")
    tabular_borders: bool = Field(default=True, description="表格是否带竖线和 \\hline")
    figure_placement: str | None = Field(default="h", description="figure 环境位置参数")
    center_figures: bool = Field(default=True, description="插图是否居中")
    encoding: str = Field(default="utf-8", description="读写文件使用的编码")


class AppConfig(BaseModel):
    """应用配置"""
    document: DocumentConfig = Field(default_factory=DocumentConfig)
    render: RenderOptions = Field(default_factory=RenderOptions)


class Outline(BaseModel):
    """从 YAML 加载的文档：元信息 + 顶层节点列表"""
    document: DocumentConfig = Field(default_factory=DocumentConfig)
    content: list[Node] = Field(default_factory=list)


def _env_list(name: str) -> list[str] | None:
    value = os.getenv(name)
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(env_file: str | Path | None = None) -> AppConfig:
    """
    从环境变量加载配置

    Args:
        env_file: .env 文件路径，默认为当前目录的 .env

    Returns:
        AppConfig 实例
    """
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    document = DocumentConfig()
    class_options = _env_list("TEXWRITE_CLASS_OPTIONS")
    packages = _env_list("TEXWRITE_PACKAGES") or []

    document = DocumentConfig(
        title=os.getenv("TEXWRITE_TITLE"),
        author=os.getenv("TEXWRITE_AUTHOR"),
        date=os.getenv("TEXWRITE_DATE", document.date),
        document_class=os.getenv("TEXWRITE_DOCUMENT_CLASS", document.document_class),
        class_options=class_options if class_options is not None else document.class_options,
        packages=[PackageSpec(name=name) for name in packages],
        auto_packages=_env_bool("TEXWRITE_AUTO_PACKAGES", True),
    )

    render = RenderOptions(
        column_align=os.getenv("TEXWRITE_COLUMN_ALIGN", "c"),
        tabular_borders=_env_bool("TEXWRITE_TABULAR_BORDERS", True),
        figure_placement=os.getenv("TEXWRITE_FIGURE_PLACEMENT", "h") or None,
        center_figures=_env_bool("TEXWRITE_CENTER_FIGURES", True),
        encoding=os.getenv("TEXWRITE_ENCODING", "utf-8"),
    )

    return AppConfig(document=document, render=render)


_SECTION_KEYS = {level.value: level for level in SectionLevel}
_NODE_KEYS = set(_SECTION_KEYS) | {
    "text", "escaped", "bloc", "item", "itemize", "enumerate", "table",
    "excel", "math", "equation", "graphic", "code", "include",
}


def _parse_package(p: Any) -> PackageSpec:
    if isinstance(p, str):
        return PackageSpec(name=p)
    return PackageSpec(**p)


def _parse_node(entry: Any, base_dir: Path) -> Node:
    """将 YAML 条目转换为内容节点"""
    if isinstance(entry, str):
        return text(entry)
    if not isinstance(entry, dict):
        raise OutlineError(f"无法识别的内容条目: {entry!r}")

    keys = _NODE_KEYS & set(entry)
    if len(keys) != 1:
        raise OutlineError(f"内容条目必须恰好包含一个类型字段: {sorted(entry)}")
    key = keys.pop()
    value = entry[key]

    def children() -> list[Node]:
        return [_parse_node(child, base_dir) for child in entry.get("children", [])]

    if key in _SECTION_KEYS:
        return section(str(value), *children(), level=_SECTION_KEYS[key])
    if key == "text":
        return text(str(value))
    if key == "escaped":
        return escaped_text(str(value))
    if key == "bloc":
        return bloc(str(value), *children(), options=entry.get("options"))
    if key == "item":
        return item(_parse_node(value, base_dir))
    if key in ("itemize", "enumerate"):
        entries = [_parse_node(e, base_dir) for e in value or []]
        return itemize(*entries) if key == "itemize" else enumeration(*entries)
    if key == "table":
        return tabular(value or [])
    if key == "excel":
        from ..utils.excel import tabular_from_excel

        return tabular_from_excel(base_dir / value, escape=entry.get("escape", True))
    if key == "math":
        return math(str(value), display=entry.get("display", False))
    if key == "equation":
        lines = value if isinstance(value, list) else [value]
        return equation(
            *(str(line) for line in lines),
            label=entry.get("label"),
            numbered=entry.get("numbered", True),
        )
    if key == "graphic":
        return graphic(value, caption=entry.get("caption", ""), scale=entry.get("scale"))
    if key == "code":
        if "language" not in entry:
            raise OutlineError(f"代码条目缺少 language 字段: {value}")
        return code(value, entry["language"])
    # include: 相对路径以大纲文件所在目录为基准
    return text_from_file(base_dir / value)


def load_outline(file_path: str | Path, defaults: DocumentConfig | None = None) -> Outline:
    """
    从 YAML 文件加载文档大纲

    Args:
        file_path: YAML 文件路径
        defaults: 文档配置默认值（通常来自 load_config），YAML 中的字段覆盖它

    Returns:
        Outline 实例
    """
    file_path = Path(file_path)
    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise OutlineError(f"YAML 解析失败: {e}") from e

    if not isinstance(data, dict):
        raise OutlineError("大纲文件顶层必须是映射")

    document_data = data.get("document") or {}
    if not isinstance(document_data, dict):
        raise OutlineError("document 字段必须是映射")

    base = defaults or DocumentConfig()
    base_dir = file_path.parent

    try:
        document_data = dict(document_data)
        if "packages" in document_data:
            document_data["packages"] = [_parse_package(p) for p in document_data["packages"] or []]
        document = DocumentConfig(**{**base.model_dump(), **document_data})
        content = [_parse_node(entry, base_dir) for entry in data.get("content") or []]
    except (ValidationError, ValueError, TypeError) as e:
        raise OutlineError(f"大纲内容无效: {e}") from e

    return Outline(document=document, content=content)
