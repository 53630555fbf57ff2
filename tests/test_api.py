"""Tests for api - lint / fix / score 编程接口"""

import pytest

from doclify.api import fix, lint, score
from doclify.fixers.base import Change, LinkChange


class TestLint:
    """lint 测试"""

    def test_clean(self, clean_markdown: str) -> None:
        """测试没有问题的文档"""
        report = lint(clean_markdown)

        assert report.passed
        assert report.health_score == 100
        assert report.to_dict() == {"errors": [], "warnings": [], "healthScore": 100, "pass": True}

    def test_errors_fail(self) -> None:
        """测试 error 导致不通过"""
        report = lint("# One\n\n# Two\n")

        assert not report.passed
        assert [f.code for f in report.errors] == ["single-h1"]
        assert report.errors[0].source == "<input>"

    def test_strict(self) -> None:
        """测试 strict 模式"""
        content = "# T\n\nTODO\n"

        assert lint(content).passed
        assert not lint(content, strict=True).passed

    def test_ignore_rules_with_alias(self) -> None:
        """测试忽略规则（支持别名）"""
        content = "# T\n\n### Deep\n\nTODO\n"
        report = lint(content, ignore_rules=["heading-increment", "placeholder"])

        assert report.warnings == []
        assert report.health_score == 100

    def test_health_score(self) -> None:
        """测试健康分计算"""
        report = lint("# One\n\ntext\n\n# Two\n\nTODO\n")
        assert report.health_score == 67


class TestFix:
    """fix 测试"""

    def test_links_then_formatting(self) -> None:
        """测试先升级链接再修复格式"""
        result = fix("Visit http://example.com\n#Title\n")

        assert result.content == "Visit <https://example.com>\n\n# Title\n"
        assert result.modified
        assert result.changes[0] == LinkChange("http://example.com", "https://example.com", rule="insecure-link")
        assert result.changes[0].to_dict() == {
            "from": "http://example.com",
            "to": "https://example.com",
            "rule": "insecure-link",
        }
        assert Change("no-missing-space-atx", 2) in result.changes

    def test_nothing_to_fix(self, clean_markdown: str) -> None:
        """测试无需修复"""
        result = fix(clean_markdown)

        assert result.content == clean_markdown
        assert not result.modified
        assert result.changes == []

    def test_fixed_content_passes_fixable_rules(self) -> None:
        """测试修复后的内容不再触发可修复的规则"""
        fixed = fix("#Title\nSee http://example.com.\n\n\n\n").content
        codes = {f.code for f in lint(fixed).warnings}

        assert "insecure-link" not in codes
        assert "no-bare-urls" not in codes
        assert "no-missing-space-atx" not in codes


class TestScore:
    """score 测试"""

    @pytest.mark.parametrize(
        ("errors", "warnings", "expected"),
        [
            (0, 0, 100),
            (1, 0, 75),
            (0, 3, 76),
            (1, 2, 59),
            (5, 0, 0),
            (0, 20, 0),
        ],
    )
    def test_score(self, errors: int, warnings: int, expected: int) -> None:
        """测试健康分"""
        assert score(errors, warnings) == expected
