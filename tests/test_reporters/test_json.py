"""Tests for JsonReporter - JSON 输出报告器测试"""

import io
import json
from pathlib import Path

from doclify import __version__
from doclify.engine import check_markdown
from doclify.reporters.json import JsonReporter
from doclify.runner import FileReport


class TestJsonReporter:
    """JsonReporter 测试"""

    def test_build(self, tmp_path: Path, clean_markdown: str) -> None:
        """测试构建报告结构"""
        bad = "# One\n\n# Two\n\nTODO\n"
        reports = [
            FileReport(tmp_path / "docs" / "bad.md", bad, check_markdown(bad, file_path="docs/bad.md")),
            FileReport(tmp_path / "good.md", clean_markdown, check_markdown(clean_markdown)),
        ]

        data = JsonReporter().build(reports, tmp_path)

        assert data["version"] == __version__
        assert data["summary"] == {"filesScanned": 2, "filesPassed": 1, "errors": 1, "warnings": 2}

        first = data["files"][0]
        assert first["file"] == "docs/bad.md"
        assert first["pass"] is False
        assert first["healthScore"] == 59
        assert first["summary"] == {"errors": 1, "warnings": 2}
        assert first["errors"][0]["code"] == "single-h1"
        assert data["files"][1]["pass"] is True

    def test_strict_file_fails_on_warnings(self, tmp_path: Path) -> None:
        """测试 strict 模式下 warning 导致失败"""
        content = "# T\n\nTODO\n"
        report = FileReport(tmp_path / "a.md", content, check_markdown(content), strict=True)

        data = JsonReporter().build([report], tmp_path)

        assert data["files"][0]["pass"] is False
        assert data["summary"]["filesPassed"] == 0

    def test_report_writes_json(self, tmp_path: Path, clean_markdown: str) -> None:
        """测试输出合法的 JSON"""
        stream = io.StringIO()
        report = FileReport(tmp_path / "a.md", clean_markdown, check_markdown(clean_markdown))

        JsonReporter(stream=stream).report([report], tmp_path)

        data = json.loads(stream.getvalue())
        assert data["files"][0]["file"] == "a.md"
        assert stream.getvalue().endswith("\n")
