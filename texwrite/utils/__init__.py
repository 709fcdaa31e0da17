"""
工具函数模块
"""

from .escape import escape_latex
from .excel import read_excel_file, tabular_from_excel

__all__ = [
    "escape_latex",
    "read_excel_file",
    "tabular_from_excel",
]
