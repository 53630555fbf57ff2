"""Tests for whitespace rules - 空白与结构规则测试"""

from doclify.checkers import whitespace


class TestTrailingSpaces:
    """no-trailing-spaces 测试"""

    def test_spaces_and_tabs(self, run_check) -> None:
        """测试行尾空格和制表符"""
        findings = run_check(whitespace.check_trailing_spaces, "a  \nb\t\nc\n")
        assert [f.line for f in findings] == [1, 2]


class TestMultipleBlanks:
    """no-multiple-blanks 测试"""

    def test_extra_blanks(self, run_check) -> None:
        """测试第二个及之后的空行"""
        findings = run_check(whitespace.check_multiple_blanks, "a\n\n\n\nb\n")
        assert [f.line for f in findings] == [3, 4]

    def test_single_blank_ok(self, run_check) -> None:
        """测试单个空行"""
        assert run_check(whitespace.check_multiple_blanks, "a\n\nb\n") == []

    def test_trailing_newline_not_counted(self, run_check) -> None:
        """测试结尾的单个换行不算空行"""
        assert run_check(whitespace.check_multiple_blanks, "a\n") == []


class TestTrailingNewline:
    """single-trailing-newline 测试"""

    def test_missing(self, run_check) -> None:
        """测试缺少结尾换行"""
        findings = run_check(whitespace.check_trailing_newline, "a\nb")

        assert len(findings) == 1
        assert findings[0].line == 2
        assert findings[0].message == "File should end with a single newline."

    def test_multiple(self, run_check) -> None:
        """测试多个结尾换行"""
        findings = run_check(whitespace.check_trailing_newline, "a\n\n")

        assert len(findings) == 1
        assert findings[0].line == 2
        assert findings[0].message == "File ends with multiple trailing newlines."

    def test_empty_and_single(self, run_check) -> None:
        """测试空文件和单个换行"""
        assert run_check(whitespace.check_trailing_newline, "") == []
        assert run_check(whitespace.check_trailing_newline, "a\n") == []


class TestBlanksAroundLists:
    """blanks-around-lists 测试"""

    def test_missing_both(self, run_check) -> None:
        """测试列表前后都缺少空行"""
        findings = run_check(whitespace.check_blanks_around_lists, "text\n- a\n- b\nmore\n")

        assert [(f.line, f.message) for f in findings] == [
            (2, "List should be preceded by a blank line."),
            (3, "List should be followed by a blank line."),
        ]

    def test_continuation_is_part_of_list(self, run_check) -> None:
        """测试缩进续行属于列表"""
        assert run_check(whitespace.check_blanks_around_lists, "- a\n  continued\n\ntext\n") == []

    def test_frontmatter_yaml_list_ignored(self, run_check) -> None:
        """测试 frontmatter 中的 YAML 列表"""
        content = "---\ntags:\n- a\n- b\n---\n\ntext\n"
        assert run_check(whitespace.check_blanks_around_lists, content) == []

    def test_thematic_break_not_list(self, run_check) -> None:
        """测试分隔线不是列表"""
        assert run_check(whitespace.check_blanks_around_lists, "text\n***\nmore\n") == []


class TestBlanksAroundFences:
    """blanks-around-fences 测试"""

    def test_missing_both(self, run_check) -> None:
        """测试代码块前后都缺少空行"""
        findings = run_check(whitespace.check_blanks_around_fences, "text\n```sh\ncode\n```\nmore\n")
        assert [f.line for f in findings] == [2, 4]

    def test_document_boundaries(self, run_check) -> None:
        """测试文档开头和结尾的代码块"""
        assert run_check(whitespace.check_blanks_around_fences, "```sh\nx\n```\n") == []


class TestFencedCodeLanguage:
    """fenced-code-language 测试"""

    def test_missing_language(self, run_check) -> None:
        """测试缺少语言标识"""
        content = "```\nx\n```\n\n~~~\ny\n~~~\n\n```python\nz\n```\n"
        findings = run_check(whitespace.check_fenced_code_language, content)

        assert [f.line for f in findings] == [1, 5]
        assert findings[0].message == "Fenced code block should specify a language."

    def test_whitespace_only_info(self, run_check) -> None:
        """测试只有空白的信息串"""
        assert len(run_check(whitespace.check_fenced_code_language, "```  \nx\n```\n")) == 1

    def test_other_fence_char_is_content(self, run_check) -> None:
        """测试代码块内的 ~~~ 不算开围栏，之后的 ``` 是闭围栏"""
        content = "```\n~~~\n```\n\n```\nx\n```\n"
        findings = run_check(whitespace.check_fenced_code_language, content)

        assert [f.line for f in findings] == [1, 5]
