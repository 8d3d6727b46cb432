"""
CLI Layer - 命令行接口层

提供命令行入口。
"""

from issue_linker.cli.app import app, links, resolve, comments, version

__all__ = [
    "app",
    "links",
    "resolve",
    "comments",
    "version",
]
