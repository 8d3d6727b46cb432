"""
数据模型定义

扫描、提取、解析各阶段产出的值对象。所有对象在一次扫描中创建和消费，
不做持久化，也不互相引用。
"""

import json
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional


class Provider(Enum):
    """代码托管平台"""
    GITHUB = "GitHub"
    GITLAB = "GitLab"
    BITBUCKET = "Bitbucket"
    GIT = "Git"  # 通用 / 自建

    @property
    def display_name(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class Position:
    """
    文档位置

    Attributes:
        line: 行号 (0-based)
        character: 列号 (0-based)
    """
    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """文档区间 [start, end)"""
    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Range start {self.start} is after end {self.end}")


@dataclass(frozen=True)
class CommentSpan:
    """
    注释区域

    Attributes:
        text: 注释原文，等于 document[start_offset:end_offset]
        start_offset: 起始偏移（含）
        end_offset: 结束偏移（不含）
    """
    text: str
    start_offset: int
    end_offset: int


@dataclass(frozen=True)
class IssueMatch:
    """
    注释内的 issue 引用

    偏移相对于所在 CommentSpan 的起点。issue_number 保留原始数字串，
    前导零不做归一化。
    """
    issue_number: str
    local_start: int
    local_end: int


@dataclass(frozen=True)
class RepoInfo:
    """
    仓库信息

    Attributes:
        web_url: 仓库网页地址（https，无 .git 后缀，无结尾斜杠）
        provider_name: 托管平台
        repo_slug: 路径部分，如 owner/repo
    """
    web_url: str
    provider_name: Provider
    repo_slug: Optional[str] = None


@dataclass(frozen=True)
class LinkRecord:
    """
    最终链接记录，每个 IssueMatch 对应一条

    Attributes:
        document_start_offset: 文档绝对起始偏移
        document_end_offset: 文档绝对结束偏移
        target_url: issue 地址
        tooltip: 悬浮提示
        issue_number: issue 编号
        range: 行列区间，供宿主渲染
    """
    document_start_offset: int
    document_end_offset: int
    target_url: str
    tooltip: str
    issue_number: str
    range: Range


@dataclass
class LinkScanResult:
    """
    单个文档的链接扫描结果

    Attributes:
        file_path: 文档路径
        language_id: 语言标识
        repo_info: 解析出的仓库信息（无仓库时为 None）
        links: 链接列表（按文档顺序）
    """
    file_path: str
    language_id: str
    repo_info: Optional[RepoInfo] = None
    links: list[LinkRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        repo = None
        if self.repo_info is not None:
            repo = {
                "web_url": self.repo_info.web_url,
                "provider_name": self.repo_info.provider_name.value,
                "repo_slug": self.repo_info.repo_slug,
            }
        return {
            "file_path": self.file_path,
            "language_id": self.language_id,
            "repo_info": repo,
            "links": [asdict(link) for link in self.links],
        }

    def to_json(self) -> str:
        """序列化为 JSON 字符串"""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)
