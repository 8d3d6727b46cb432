"""
链接组装

把注释扫描、引用提取、仓库解析串起来，为文档生成可点击的 issue 链接。
"""

import logging
from typing import Iterable, Optional, Protocol

from issue_linker.core.comments import scan_comments
from issue_linker.core.models import LinkRecord, LinkScanResult, Range, RepoInfo
from issue_linker.core.references import extract_from_span
from issue_linker.document import HostDocument
from issue_linker.repo.resolver import RemoteResolver, build_issue_url

logger = logging.getLogger(__name__)


class CancellationToken(Protocol):
    """取消信号协议"""

    @property
    def is_cancellation_requested(self) -> bool:
        ...


def format_tooltip(repo_info: RepoInfo, issue_number: str) -> str:
    return f"Open {repo_info.provider_name.display_name} Issue #{issue_number}"


class DocumentLinker:
    """文档链接提供者"""

    def __init__(self, resolver: Optional[RemoteResolver] = None):
        self.resolver = resolver or RemoteResolver()

    def provide_links(self, document: HostDocument) -> list[LinkRecord]:
        """
        为文档生成 issue 链接

        每次调用解析一次仓库；文档不在仓库中或远程无法识别时返回空列表。
        """
        repo_info = self.resolver.resolve(document.file_path)
        if repo_info is None:
            return []
        return self.provide_links_for_repo(document, repo_info)

    def provide_links_for_repo(
        self,
        document: HostDocument,
        repo_info: RepoInfo,
    ) -> list[LinkRecord]:
        """使用已解析的仓库信息生成链接"""
        links: list[LinkRecord] = []

        for span in scan_comments(document.get_text(), document.language_id):
            for issue, start, end in extract_from_span(span):
                start_pos = document.position_at(start)
                end_pos = document.position_at(end)
                if start_pos > end_pos:
                    logger.error(
                        f"Invalid range for issue #{issue.issue_number} in "
                        f"{document.file_path}: {start_pos} > {end_pos}"
                    )
                    continue

                links.append(LinkRecord(
                    document_start_offset=start,
                    document_end_offset=end,
                    target_url=build_issue_url(
                        repo_info.web_url, issue.issue_number, repo_info.provider_name
                    ),
                    tooltip=format_tooltip(repo_info, issue.issue_number),
                    issue_number=issue.issue_number,
                    range=Range(start=start_pos, end=end_pos),
                ))

        return links

    def scan_document(self, document: HostDocument) -> LinkScanResult:
        """生成包含仓库信息的完整扫描结果"""
        repo_info = self.resolver.resolve(document.file_path)
        result = LinkScanResult(
            file_path=document.file_path,
            language_id=document.language_id,
            repo_info=repo_info,
        )
        if repo_info is not None:
            result.links = self.provide_links_for_repo(document, repo_info)
        return result

    def link_documents(
        self,
        documents: Iterable[HostDocument],
        cancellation: Optional[CancellationToken] = None,
    ) -> list[LinkScanResult]:
        """
        批量处理文档

        取消信号只在文档之间检查，单个文档的扫描不会被中断。
        """
        results = []
        for document in documents:
            if cancellation is not None and cancellation.is_cancellation_requested:
                logger.debug("Link scan cancelled")
                break
            results.append(self.scan_document(document))
        return results
