"""
Excel 表格读取

支持 .xls 和 .xlsx 文件，转换为 Tabular 节点
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .escape import escape_latex

if TYPE_CHECKING:
    from ..models import Tabular

logger = logging.getLogger(__name__)


def read_excel_file(file_path: str | Path) -> list[list[str]]:
    """
    读取 Excel 文件第一个工作表

    Args:
        file_path: Excel 文件路径

    Returns:
        二维列表，每个内层列表代表一行；完全空白的行被跳过
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Excel 文件不存在: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix == ".xlsx":
        rows = _read_xlsx(file_path)
    elif suffix == ".xls":
        rows = _read_xls(file_path)
    else:
        raise ValueError(f"不支持的文件格式: {suffix}")

    logger.debug("读取 %s: %d 行", file_path, len(rows))
    return rows


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value)


def _keep_row(row: list[str]) -> bool:
    return any(cell.strip() for cell in row)


def _read_xlsx(file_path: Path) -> list[list[str]]:
    from openpyxl import load_workbook

    wb = load_workbook(file_path, read_only=True, data_only=True)
    try:
        ws = wb.active
        rows = [[_cell_text(cell.value) for cell in row] for row in ws.iter_rows()]
    finally:
        wb.close()
    return [row for row in rows if _keep_row(row)]


def _read_xls(file_path: Path) -> list[list[str]]:
    import xlrd

    wb = xlrd.open_workbook(file_path)
    ws = wb.sheet_by_index(0)
    rows = [
        [_cell_text(ws.cell_value(row_idx, col_idx)) for col_idx in range(ws.ncols)]
        for row_idx in range(ws.nrows)
    ]
    return [row for row in rows if _keep_row(row)]


def tabular_from_excel(file_path: str | Path, escape: bool = True) -> Tabular:
    """
    将 Excel 文件转换为表格节点

    Args:
        file_path: Excel 文件路径
        escape: 是否转义单元格中的 LaTeX 特殊字符

    Returns:
        Tabular 节点，每个单元格为 RawText
    """
    from ..models import tabular

    rows = read_excel_file(file_path)
    if escape:
        rows = [[escape_latex(cell) for cell in row] for row in rows]
    return tabular(rows)
