"""
公式数据模型
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EquationSpec(BaseModel):
    """公式内容：一行或多行（多行时使用 align 环境对齐）"""
    model_config = ConfigDict(frozen=True)

    lines: list[str] = Field(..., description="公式各行的 LaTeX 源码")
    label: str | None = Field(default=None, description="引用标签，如 eq:energy")
    numbered: bool = Field(default=True, description="是否编号")

    @field_validator("lines")
    @classmethod
    def _not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("公式至少需要一行")
        return value

    @property
    def multiline(self) -> bool:
        return len(self.lines) > 1

    @property
    def environment(self) -> str:
        """对应的 LaTeX 环境名"""
        name = "align" if self.multiline else "equation"
        return name if self.numbered else name + "*"
