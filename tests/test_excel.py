"""
测试 Excel 表格读取
"""

from pathlib import Path

import pytest
from openpyxl import Workbook

from texwrite import render_to_string
from texwrite.utils import escape_latex, read_excel_file, tabular_from_excel


@pytest.fixture
def workbook_path(tmp_path: Path) -> Path:
    wb = Workbook()
    ws = wb.active
    ws.append(["Item", "Share"])
    ws.append(["R&D", "50%"])
    ws.append([None, None])
    ws.append(["Sales", 12])
    path = tmp_path / "data.xlsx"
    wb.save(path)
    return path


def test_read_xlsx_skips_blank_rows(workbook_path: Path):
    assert read_excel_file(workbook_path) == [
        ["Item", "Share"],
        ["R&D", "50%"],
        ["Sales", "12"],
    ]


def test_read_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_excel_file(tmp_path / "missing.xlsx")


def test_read_unsupported_suffix(tmp_path: Path):
    path = tmp_path / "data.csv"
    path.write_text("a,b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_excel_file(path)


def test_tabular_from_excel_escapes_cells(workbook_path: Path):
    table = tabular_from_excel(workbook_path)
    assert len(table.rows) == 3
    output = render_to_string(table)
    assert "R\\&D & 50\\% \\\\" in output


def test_tabular_from_excel_raw(workbook_path: Path):
    table = tabular_from_excel(workbook_path, escape=False)
    assert table.rows[1][0].text == "R&D"


def test_escape_latex_single_pass():
    assert escape_latex("a\\b{c}") == "a\\textbackslash{}b\\{c\\}"
    assert escape_latex("x_1 ^ #2 ~") == "x\\_1 \\textasciicircum{} \\#2 \\textasciitilde{}"
