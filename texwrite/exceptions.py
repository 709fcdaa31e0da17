"""
异常定义
"""

from __future__ import annotations

from pathlib import Path


class TexwriteError(Exception):
    """texwrite 异常基类"""


class InvalidOperationError(TexwriteError):
    """对不支持的节点类型执行操作（如向非容器节点添加子节点）"""

    def __init__(self, kind: str, operation: str = "add"):
        self.kind = kind
        self.operation = operation
        super().__init__(f"节点类型 '{kind}' 不支持 '{operation}' 操作")


class ReadFailureError(TexwriteError):
    """渲染时无法读取外部文件"""

    def __init__(self, path: str | Path, reason: str | None = None):
        self.path = str(path)
        self.reason = reason
        message = f"无法读取文件: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class OutlineError(TexwriteError):
    """YAML 大纲无法转换为内容树"""
