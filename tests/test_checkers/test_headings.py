"""Tests for heading rules - 标题规则测试

测试场景：
1. single-h1：缺失 / 多个（聚合为一个 Finding）
2. heading-hierarchy：跳级与降级
3. duplicate-heading：H1/H2 全局唯一，H3+ 按父章节区分
4. 标题格式：缺少空格、缩进、结尾标点、前后空行、空章节
"""

from doclify.checkers import headings
from doclify.core.finding import Severity


class TestSingleH1:
    """single-h1 测试"""

    def test_missing(self, run_check) -> None:
        """测试缺少 H1"""
        findings = run_check(headings.check_single_h1, "## Only\n")

        assert len(findings) == 1
        assert findings[0].line == 1
        assert findings[0].message == "Missing H1 heading."
        assert findings[0].severity is Severity.ERROR

    def test_multiple_reported_once(self, run_check) -> None:
        """测试多个 H1 只报告一次"""
        content = "---\ntitle: T\n---\n# First\nContent\n# Second\nMore\n# Third"
        findings = run_check(headings.check_single_h1, content)

        assert len(findings) == 1
        assert findings[0].line == 4
        assert "4, 6, 8" in findings[0].message

    def test_h1_in_code_ignored(self, run_check) -> None:
        """测试代码块中的 # 不计入"""
        assert run_check(headings.check_single_h1, "# A\n\n```\n# B\n```\n") == []


class TestHeadingHierarchy:
    """heading-hierarchy 测试"""

    def test_skipped_level(self, run_check) -> None:
        """测试跳级"""
        findings = run_check(headings.check_heading_hierarchy, "# A\n\n### B\n")

        assert len(findings) == 1
        assert findings[0].line == 3
        assert "H1 -> H3" in findings[0].message

    def test_decreasing_level_allowed(self, run_check) -> None:
        """测试降级不算跳级"""
        content = "# A\n\n## B\n\n### C\n\n## D\n\n### E\n"
        assert run_check(headings.check_heading_hierarchy, content) == []

    def test_first_heading_any_level(self, run_check) -> None:
        """测试第一个标题可以是任意级别"""
        assert run_check(headings.check_heading_hierarchy, "### Deep start\n") == []


class TestDuplicateHeading:
    """duplicate-heading 测试"""

    def test_same_name_under_different_parents(self, run_check) -> None:
        """测试不同父章节下的同名 H3 不算重复"""
        content = "# Doc\n\n## A\n\n### Setup\n\ntext\n\n## B\n\n### Setup\n\ntext\n"
        assert run_check(headings.check_duplicate_heading, content) == []

    def test_same_name_under_same_parent(self, run_check) -> None:
        """测试同一父章节下的同名 H3"""
        content = "# Doc\n\n## A\n\n### Setup\n\ntext\n\n### Setup\n\ntext\n"
        findings = run_check(headings.check_duplicate_heading, content)

        assert len(findings) == 1
        assert findings[0].line == 9
        assert "line 5" in findings[0].message

    def test_h2_global_case_insensitive(self, run_check) -> None:
        """测试 H2 全局唯一且不区分大小写"""
        content = "# One\n\n## Intro\n\n# Two\n\n## intro\n"
        findings = run_check(headings.check_duplicate_heading, content)

        assert [f.line for f in findings] == [7]


class TestHeadingFormat:
    """标题格式规则测试"""

    def test_missing_space(self, run_check) -> None:
        """测试 # 后缺少空格"""
        findings = run_check(headings.check_missing_space_atx, "#Title\n\n## Fine\n\n####### seven\n")
        assert [f.line for f in findings] == [1]

    def test_indented_heading(self, run_check) -> None:
        """测试缩进的标题"""
        findings = run_check(headings.check_heading_start_left, "  # Indented\n\n  #notheading\n")
        assert [f.line for f in findings] == [1]

    def test_trailing_punctuation(self, run_check) -> None:
        """测试标题结尾标点"""
        content = "# Title.\n\n## Why?\n\n## Closed ##\n\n## Done! ##\n"
        findings = run_check(headings.check_trailing_punctuation, content)

        assert [f.line for f in findings] == [1, 7]
        assert '"."' in findings[0].message
        assert '"!"' in findings[1].message


class TestBlanksAroundHeadings:
    """blanks-around-headings 测试"""

    def test_missing_blank_after(self, run_check) -> None:
        """测试标题后缺少空行"""
        findings = run_check(headings.check_blanks_around_headings, "# A\ntext\n")

        assert len(findings) == 1
        assert findings[0].message == "Heading should be followed by a blank line."

    def test_missing_blank_before(self, run_check) -> None:
        """测试标题前缺少空行"""
        findings = run_check(headings.check_blanks_around_headings, "text\n## B\n\nx\n")

        assert len(findings) == 1
        assert findings[0].line == 2
        assert findings[0].message == "Heading should be preceded by a blank line."

    def test_after_frontmatter_exempt(self, run_check) -> None:
        """测试紧跟 frontmatter 的标题"""
        content = "---\ntitle: x\n---\n# A\n\ntext\n"
        assert run_check(headings.check_blanks_around_headings, content) == []

    def test_fence_directly_after_heading(self, run_check) -> None:
        """测试标题后直接是代码块（基于原始行判断）"""
        findings = run_check(headings.check_blanks_around_headings, "# A\n```sh\nx\n```\n")
        assert [f.line for f in findings] == [1]


class TestEmptySections:
    """no-empty-sections 测试"""

    def test_subheading_counts_as_content(self, run_check) -> None:
        """测试更深层的子标题算作内容"""
        assert run_check(headings.check_empty_sections, "# A\n\n## B\n\ntext\n") == []

    def test_sibling_heading(self, run_check) -> None:
        """测试紧跟同级标题的空章节"""
        findings = run_check(headings.check_empty_sections, "# A\n\n## B\n\n## C\n\ntext\n")
        assert [f.line for f in findings] == [3]

    def test_empty_at_end(self, run_check) -> None:
        """测试文档末尾的空章节"""
        findings = run_check(headings.check_empty_sections, "# A\n\ntext\n\n## End\n\n")
        assert [f.line for f in findings] == [5]
