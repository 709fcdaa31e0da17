"""
表格布局推断

列数取所有行中的最大长度（无行或全为空行时为 1），
列格式在输出任何行之前一次性确定；较短的行按原样输出，不补齐单元格。
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NamedTuple

COLUMN_SEPARATOR = " & "
ROW_TERMINATOR = r" \\"
HLINE = r"\hline"


class TabularLayout(NamedTuple):
    """表格布局"""
    columns: int
    spec: str
    borders: bool


def column_count(rows: Sequence[Sequence[Any]]) -> int:
    """推断列数"""
    return max((len(row) for row in rows), default=0) or 1


def column_spec(columns: int, align: str = "c", borders: bool = True) -> str:
    """
    生成列格式说明

    Args:
        columns: 列数
        align: 对齐方式 l / c / r
        borders: 是否带竖线

    Returns:
        如 |c|c|c| 或 ccc
    """
    if columns < 1:
        raise ValueError(f"列数必须为正数: {columns}")
    if borders:
        return "|" + f"{align}|" * columns
    return align * columns


def infer_layout(rows: Sequence[Sequence[Any]], align: str = "c", borders: bool = True) -> TabularLayout:
    columns = column_count(rows)
    return TabularLayout(columns=columns, spec=column_spec(columns, align, borders), borders=borders)


def format_row(cells: Sequence[str]) -> str:
    """单元格文本以列分隔符连接，并以行结束符结尾"""
    return COLUMN_SEPARATOR.join(cells) + ROW_TERMINATOR
