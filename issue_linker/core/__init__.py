"""
Core Layer - 核心层

包含注释扫描器、issue 引用提取器和数据模型。
"""

from issue_linker.core.models import (
    Provider,
    Position,
    Range,
    CommentSpan,
    IssueMatch,
    RepoInfo,
    LinkRecord,
    LinkScanResult,
)
from issue_linker.core.profiles import (
    CommentStyle,
    CommentProfile,
    PROFILES,
    LANGUAGE_STYLES,
    EXTENSION_TO_LANGUAGE,
    get_profile,
    detect_language,
)
from issue_linker.core.comments import scan_comments
from issue_linker.core.references import (
    ISSUE_REFERENCE_PATTERN,
    extract_references,
    extract_from_span,
)

__all__ = [
    # models
    "Provider",
    "Position",
    "Range",
    "CommentSpan",
    "IssueMatch",
    "RepoInfo",
    "LinkRecord",
    "LinkScanResult",
    # profiles
    "CommentStyle",
    "CommentProfile",
    "PROFILES",
    "LANGUAGE_STYLES",
    "EXTENSION_TO_LANGUAGE",
    "get_profile",
    "detect_language",
    # scanning
    "scan_comments",
    "ISSUE_REFERENCE_PATTERN",
    "extract_references",
    "extract_from_span",
]
