"""
配置

解析器和目录扫描的配置项，默认值即常规行为，CLI 选项会覆盖其中部分字段。
"""

from dataclasses import dataclass, field


@dataclass
class ResolverConfig:
    """
    仓库解析配置

    Attributes:
        marker_name: 仓库根目录标记（目录或文件均可）
        remote_name: 读取的远程名
    """
    marker_name: str = ".git"
    remote_name: str = "origin"


@dataclass
class ScanConfig:
    """
    目录扫描配置

    Attributes:
        max_file_size: 超过该大小（字节）的文件跳过
        respect_gitignore: 是否按 .gitignore 过滤
        include_nested: 是否加载子目录中的 .gitignore
        extra_ignore_patterns: 额外的忽略规则（gitwildmatch 语法）
    """
    max_file_size: int = 2 * 1024 * 1024
    respect_gitignore: bool = True
    include_nested: bool = True
    extra_ignore_patterns: list[str] = field(default_factory=list)
