"""
Repo Layer - 仓库层

包含仓库根目录查找和远程地址解析。
"""

from issue_linker.repo.resolver import (
    RemoteResolver,
    OriginUrlReader,
    parse_remote_url,
    classify_provider,
    build_issue_url,
    repo_info_from_url,
    read_origin_url,
)

__all__ = [
    "RemoteResolver",
    "OriginUrlReader",
    "parse_remote_url",
    "classify_provider",
    "build_issue_url",
    "repo_info_from_url",
    "read_origin_url",
]
