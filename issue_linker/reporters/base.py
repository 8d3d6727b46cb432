"""
报告器基类 - 定义报告器接口
"""

from typing import Protocol

from issue_linker.core.models import LinkScanResult


class Reporter(Protocol):
    """报告器协议"""

    def report(self, results: list[LinkScanResult], target: str) -> None:
        """生成报告"""
        ...
