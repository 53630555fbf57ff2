"""JsonReporter - JSON 输出报告器"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from doclify.reporters.base import Reporter

if TYPE_CHECKING:
    from doclify.runner import FileReport


@dataclass
class JsonReporter(Reporter):
    """以 JSON 输出所有文件的检查结果

    Attributes:
        indent: 缩进空格数
        stream: 输出流（默认 stdout）
    """

    name: str = "json"
    description: str = "Machine-readable JSON output"

    indent: int = 2
    stream: TextIO | None = None

    def build(self, reports: list[FileReport], root: Path) -> dict[str, Any]:
        """构建可序列化的报告"""
        from doclify import __version__

        files = []
        for file_report in reports:
            try:
                rel_path = file_report.path.relative_to(root)
            except ValueError:
                rel_path = file_report.path
            files.append(
                {
                    "file": Path(rel_path).as_posix(),
                    **file_report.result.to_dict(),
                    "healthScore": file_report.health_score,
                    "pass": file_report.passed,
                }
            )

        return {
            "version": __version__,
            "files": files,
            "summary": {
                "filesScanned": len(reports),
                "filesPassed": sum(1 for r in reports if r.passed),
                "errors": sum(r.result.summary.errors for r in reports),
                "warnings": sum(r.result.summary.warnings for r in reports),
            },
        }

    def report(self, reports: list[FileReport], root: Path) -> None:
        stream = self.stream or sys.stdout
        json.dump(self.build(reports, root), stream, indent=self.indent, ensure_ascii=False)
        stream.write("\n")
