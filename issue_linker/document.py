"""
文档模型

宿主文档协作者的协议定义，以及基于内存字符串的默认实现 ``TextDocument``。
偏移为 Python 字符串下标，行列均从 0 开始；行按 ``\\n`` 切分，``\\r\\n`` 中的
``\\r`` 计入上一行末尾。
"""

import bisect
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from issue_linker.core.models import Position
from issue_linker.core.profiles import detect_language


class HostDocument(Protocol):
    """宿主文档协议"""

    @property
    def file_path(self) -> str:
        ...

    @property
    def language_id(self) -> str:
        ...

    def get_text(self) -> str:
        ...

    def position_at(self, offset: int) -> Position:
        ...

    def offset_at(self, position: Position) -> int:
        ...


@dataclass
class TextDocument:
    """
    内存文档

    Attributes:
        file_path: 文档路径（用于仓库解析）
        text: 文档全文
        language_id: 语言标识
    """
    file_path: str
    text: str
    language_id: str = "plaintext"
    _line_starts: list[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        index = self.text.find("\n")
        while index != -1:
            starts.append(index + 1)
            index = self.text.find("\n", index + 1)
        self._line_starts = starts

    @classmethod
    def from_path(
        cls,
        path: Path,
        language_id: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> "TextDocument":
        """
        从文件读取文档

        Args:
            path: 文件路径
            language_id: 语言标识，缺省时按文件名推断
            encoding: 文件编码，无法解码的字节会被替换

        Raises:
            OSError: 文件无法读取
        """
        text = path.read_text(encoding=encoding, errors="replace")
        return cls(
            file_path=str(path),
            text=text,
            language_id=language_id or detect_language(path.name),
        )

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def get_text(self) -> str:
        return self.text

    def position_at(self, offset: int) -> Position:
        """偏移转行列，越界偏移会被截断到文档范围内"""
        offset = min(max(offset, 0), len(self.text))
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(line=line, character=offset - self._line_starts[line])

    def offset_at(self, position: Position) -> int:
        """行列转偏移，越界位置会被截断到文档范围内"""
        if position.line < 0:
            return 0
        if position.line >= len(self._line_starts):
            return len(self.text)
        line_start = self._line_starts[position.line]
        if position.line + 1 < len(self._line_starts):
            line_end = self._line_starts[position.line + 1] - 1
        else:
            line_end = len(self.text)
        return line_start + min(max(position.character, 0), line_end - line_start)
