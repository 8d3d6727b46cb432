"""
JSON 报告器 - 输出 JSON 格式报告
"""

import json
import sys
from typing import TextIO

from issue_linker.core.models import LinkScanResult


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def report(self, results: list[LinkScanResult], target: str) -> None:
        """生成 JSON 格式报告"""
        report_data = {
            "target": target,
            "documents": [result.to_dict() for result in results],
            "summary": {
                "documents": len(results),
                "documents_with_repo": sum(1 for r in results if r.repo_info is not None),
                "links": sum(len(r.links) for r in results),
            },
        }

        json_str = json.dumps(report_data, indent=2, ensure_ascii=False)
        print(json_str, file=self.output)
