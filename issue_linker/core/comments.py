"""
注释扫描

按语言风格在文档中定位注释区域，惰性产出带精确偏移的 CommentSpan。

两种扫描方式：
- 块扫描：风格定义了块注释分隔符时，对整篇文档做一次正则扫描，块注释可以跨行
- 行扫描：只有行注释前缀的风格（包括 DEFAULT 回退），逐行判断去掉前导空白后
  是否以前缀开头，命中的整行作为一个 span

同一风格只使用一种方式，不会合并两种结果。
"""

import re
from typing import Iterator

from issue_linker.core.models import CommentSpan
from issue_linker.core.profiles import (
    BLOCK_PATTERNS,
    CommentProfile,
    get_profile,
)

# 一行内容（不含换行符；\r 在下面单独去掉）
LINE_PATTERN = re.compile(r"^.*$", re.MULTILINE)


def scan_comments(document_text: str, language_id: str) -> Iterator[CommentSpan]:
    """
    扫描文档中的注释区域

    Args:
        document_text: 文档全文
        language_id: 语言标识，未知语言使用 DEFAULT 风格

    Yields:
        按偏移升序、互不重叠的 CommentSpan
    """
    profile = get_profile(language_id)
    if profile.has_blocks:
        return _scan_blocks(document_text, profile)
    return _scan_lines(document_text, profile)


def _scan_blocks(text: str, profile: CommentProfile) -> Iterator[CommentSpan]:
    pattern = BLOCK_PATTERNS[profile.style]
    for match in pattern.finditer(text):
        start, end = match.span("comment")
        if start < 0:
            continue  # 字符串
        yield CommentSpan(text=text[start:end], start_offset=start, end_offset=end)


def _scan_lines(text: str, profile: CommentProfile) -> Iterator[CommentSpan]:
    for match in LINE_PATTERN.finditer(text):
        start, end = match.span()
        line = match.group()
        if line.endswith("\r"):
            line = line[:-1]
            end -= 1
        if not line.lstrip().startswith(profile.line_prefixes):
            continue
        yield CommentSpan(text=line, start_offset=start, end_offset=end)

