"""
LaTeX 特殊字符转义
"""

from __future__ import annotations

import re

_LATEX_REPLACEMENTS = {
    "\\": "\\textbackslash{}",
    "&": "\\&",
    "%": "\\%",
    "$": "\\$",
    "#": "\\#",
    "_": "\\_",
    "{": "\\{",
    "}": "\\}",
    "~": "\\textasciitilde{}",
    "^": "\\textasciicircum{}",
}

_LATEX_PATTERN = re.compile("|".join(re.escape(ch) for ch in _LATEX_REPLACEMENTS))


def escape_latex(text: str) -> str:
    """转义 LaTeX 特殊字符"""
    # 单次扫描替换，避免 \textbackslash{} 中的花括号被二次转义
    return _LATEX_PATTERN.sub(lambda m: _LATEX_REPLACEMENTS[m.group(0)], text)
