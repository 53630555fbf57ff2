"""Tests for engine - check_markdown 端到端测试

测试场景：
1. 多个 H1 聚合为一个 error
2. 代码块对规则不可见
3. 行内抑制与整文件指令
4. 自定义规则与内置规则共用求值流程
"""

import re

from doclify.core.checker import CustomRule
from doclify.core.finding import Severity
from doclify.engine import build_rule_entries, check_markdown


def _codes(findings) -> list[str]:
    return [f.code for f in findings]


class TestCheckMarkdown:
    """check_markdown 基础测试"""

    def test_clean_document(self, clean_markdown: str) -> None:
        """测试没有问题的文档"""
        result = check_markdown(clean_markdown)

        assert result.errors == []
        assert result.warnings == []
        assert result.passed(strict=True)

    def test_multiple_h1(self) -> None:
        """测试多个 H1 只产生一个 error"""
        content = "---\ntitle: T\n---\n# First\nContent\n# Second\nMore\n# Third"
        result = check_markdown(content)

        assert _codes(result.errors) == ["single-h1"]
        assert result.errors[0].line == 4
        assert "4, 6, 8" in result.errors[0].message

    def test_code_fence_placeholder(self) -> None:
        """测试代码块中的占位符不报告"""
        result = check_markdown("# T\n```\nTODO inside\n```\nTODO outside")
        placeholders = [f for f in result.warnings if f.code == "placeholder"]

        assert [f.line for f in placeholders] == [5]

    def test_code_fence_opacity(self) -> None:
        """测试代码块中的内容不触发规则"""
        content = "# Title\n\n```text\n# Not a heading\nhttp://insecure.example.com TODO\n- x\n```\n"
        result = check_markdown(content)

        assert [f for f in result.findings if f.line in (4, 5, 6)] == []

    def test_source_and_options(self) -> None:
        """测试来源标识和规则选项"""
        result = check_markdown(
            "# T\n\n" + "x" * 30 + "\n",
            max_line_length=20,
            file_path="docs/a.md",
            check_frontmatter=True,
        )

        assert _codes(result.warnings) == ["frontmatter", "line-length"]
        assert all(f.source == "docs/a.md" for f in result.warnings)

    def test_line_numbers_in_range(self) -> None:
        """测试所有行号都在文档范围内"""
        content = "#Bad\n\n\n\ntext  \n(a)[b]\n* x\n- y\n```\ncode\n```\nhttp://x.com\n\n\n"
        result = check_markdown(content)
        total = len(content.split("\n"))

        assert result.findings
        assert all(1 <= f.line <= total for f in result.findings)


class TestSuppression:
    """行内抑制测试"""

    def test_disable_next_line(self) -> None:
        """测试 disable-next-line"""
        content = "# T\n\n<!-- doclify-disable-next-line placeholder -->\nTODO here\nTODO there\n"
        result = check_markdown(content)
        placeholders = [f for f in result.warnings if f.code == "placeholder"]

        assert [f.line for f in placeholders] == [5]

    def test_alias_in_directive(self) -> None:
        """测试指令中使用规则别名"""
        content = "# T\n\n<!-- doclify-disable-next-line heading-increment -->\n### Deep\n\ntext\n"
        result = check_markdown(content)

        assert "heading-hierarchy" not in _codes(result.warnings)

    def test_block_with_enable_all(self) -> None:
        """测试 enable 清空嵌套的禁用"""
        content = (
            "# T\n\n"
            "<!-- doclify-disable placeholder -->\n"
            "<!-- doclify-disable placeholder -->\n"
            "TODO hidden\n"
            "<!-- doclify-enable -->\n"
            "TODO shown\n"
        )
        result = check_markdown(content)
        placeholders = [f for f in result.warnings if f.code == "placeholder"]

        assert [f.line for f in placeholders] == [7]

    def test_directive_text_not_linted(self) -> None:
        """测试指令注释中的规则 ID 不会触发内容规则"""
        content = "# T\n\n<!-- doclify-disable placeholder -->\nTODO hidden\n<!-- doclify-enable placeholder -->\n"
        result = check_markdown(content)

        assert "placeholder" not in _codes(result.warnings)

    def test_directive_inside_code_ignored(self) -> None:
        """测试代码块中的指令无效"""
        content = "# T\n\n```md\n<!-- doclify-disable-file -->\n```\n\nTODO\n"
        result = check_markdown(content)

        assert "placeholder" in _codes(result.warnings)

    def test_disable_file(self) -> None:
        """测试整文件禁用"""
        result = check_markdown("<!-- doclify-disable-file -->\n#Bad\n# One\n# Two\nTODO")

        assert result.errors == []
        assert result.warnings == []

    def test_disable_file_with_rules(self) -> None:
        """测试整文件禁用部分规则"""
        content = "<!-- doclify-disable-file single-h1 placeholder -->\n\n## Sub\n\nTODO\n"
        result = check_markdown(content)

        assert result.errors == []
        assert "placeholder" not in _codes(result.warnings)


class TestCustomRules:
    """自定义规则测试"""

    def test_custom_rule_findings(self) -> None:
        """测试自定义规则的结果归类和位置"""
        rule = CustomRule(
            id="no-foo",
            severity=Severity.ERROR,
            pattern=re.compile("foo", re.IGNORECASE),
            message="Avoid foo",
        )
        content = "# T\n\nFOO here\n\n`foo` in code\n\n```text\nfoo\n```\n"
        result = check_markdown(content, custom_rules=[rule])

        assert _codes(result.errors) == ["no-foo"]
        assert result.errors[0].line == 3
        assert result.errors[0].message == "Avoid foo"

    def test_custom_rules_run_after_builtins(self) -> None:
        """测试自定义规则排在内置规则之后"""
        rule = CustomRule("my-rule", Severity.WARNING, re.compile("x"), "m")
        entries = build_rule_entries([rule])

        assert entries[-1].id == "my-rule"
        assert len(entries) == 29

    def test_custom_rule_suppressed(self) -> None:
        """测试自定义规则同样可被抑制"""
        rule = CustomRule("no-foo", Severity.WARNING, re.compile("foo"), "m")
        content = "# T\n\n<!-- doclify-disable-next-line no-foo -->\nfoo\n"

        assert "no-foo" not in _codes(check_markdown(content, custom_rules=[rule]).warnings)
