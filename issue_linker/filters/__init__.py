"""
Filters Layer - 过滤层

基于 pathspec 的 .gitignore 文件过滤。
"""

from issue_linker.filters.pathspec_filter import PathspecFilter, DEFAULT_IGNORE_PATTERNS

__all__ = [
    "PathspecFilter",
    "DEFAULT_IGNORE_PATTERNS",
]
