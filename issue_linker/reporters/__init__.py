"""
Reporters Layer - 报告层

包含 Rich 终端报告器和 JSON 报告器。
"""

from issue_linker.reporters.base import Reporter
from issue_linker.reporters.rich_reporter import RichReporter
from issue_linker.reporters.json_reporter import JsonReporter

__all__ = [
    "Reporter",
    "RichReporter",
    "JsonReporter",
]
