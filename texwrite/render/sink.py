"""
输出目标

渲染器只通过 write_fragment / write_line 追加文本，从不打开、关闭或刷新输出目标。
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import TextIO


class OutputSink(ABC):
    """只追加的文本输出目标"""

    @abstractmethod
    def write_fragment(self, text: str) -> None:
        """追加文本，不带换行"""
        pass

    def write_line(self, text: str = "") -> None:
        """追加一行文本"""
        self.write_fragment(text + "\n")


class StringSink(OutputSink):
    """内存缓冲区，用于整体渲染成功后再一次性输出"""

    def __init__(self) -> None:
        self._buffer = io.StringIO()

    def write_fragment(self, text: str) -> None:
        self._buffer.write(text)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {len(self.getvalue())} chars>"


class StreamSink(OutputSink):
    """包装已打开的文本流（如 sys.stdout）"""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def write_fragment(self, text: str) -> None:
        self.stream.write(text)
