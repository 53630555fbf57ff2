"""Tests for core.fences module

围栏代码块识别测试：
1. 行数不变
2. 同类且足够长的围栏才能关闭
3. 未闭合的围栏延续到文档末尾
"""

import pytest

from doclify.core.fences import (
    FenceLine,
    FenceState,
    classify_fences,
    mask_inline_code,
    strip_fenced_blocks,
    strip_inline_code,
)


class TestStripFencedBlocks:
    """strip_fenced_blocks 测试"""

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "plain text",
            "a\n```\ncode\n```\nb\n",
            "```js\nunterminated\nstill code",
            "~~~\n```\n~~~\n\n\n",
            "````\n```\ninner\n```\n````\ntext",
        ],
    )
    def test_line_count_preserved(self, content: str) -> None:
        """测试行数保持不变"""
        stripped = strip_fenced_blocks(content)
        assert len(stripped.split("\n")) == len(content.split("\n"))

    def test_fence_lines_blanked(self) -> None:
        """测试代码块及围栏行变为空行"""
        content = "before\n```python\nx = 1\n```\nafter"
        assert strip_fenced_blocks(content) == "before\n\n\n\nafter"

    def test_shorter_fence_does_not_close(self) -> None:
        """测试较短的围栏不能关闭较长的围栏"""
        content = "````\n```\ninner\n```\n````\ntext"
        assert strip_fenced_blocks(content) == "\n\n\n\n\ntext"

    def test_mixed_fence_chars(self) -> None:
        """测试反引号与波浪线互不关闭"""
        content = "```\n~~~\nstill code\n```\nout"
        assert strip_fenced_blocks(content) == "\n\n\n\nout"

    def test_unterminated_fence(self) -> None:
        """测试未闭合的围栏延续到末尾"""
        assert strip_fenced_blocks("a\n```\nb\nc") == "a\n\n\n"

    def test_close_with_info_string_is_body(self) -> None:
        """测试带信息串的围栏行不能关闭代码块"""
        kinds = classify_fences(["```", "``` js", "```"])
        assert kinds == [FenceLine.OPEN, FenceLine.BODY, FenceLine.CLOSE]


class TestFenceState:
    """FenceState 测试"""

    def test_feed_sequence(self) -> None:
        """测试逐行推进状态"""
        state = FenceState()

        assert state.feed("text") is FenceLine.TEXT
        assert state.feed("~~~~sh") is FenceLine.OPEN
        assert state.in_fence
        assert state.fence_char == "~"
        assert state.fence_len == 4
        assert state.feed("~~~") is FenceLine.BODY
        assert state.feed("~~~~~  ") is FenceLine.CLOSE
        assert not state.in_fence
        assert state.feed("text") is FenceLine.TEXT

    def test_is_code(self) -> None:
        """测试 is_code 属性"""
        assert not FenceLine.TEXT.is_code
        assert FenceLine.OPEN.is_code
        assert FenceLine.BODY.is_code
        assert FenceLine.CLOSE.is_code


class TestInlineCode:
    """行内代码处理测试"""

    def test_strip_inline_code(self) -> None:
        """测试移除行内代码"""
        assert strip_inline_code("use `TODO` here") == "use  here"

    def test_mask_keeps_length(self) -> None:
        """测试遮盖后长度不变"""
        line = "a `b c` d"
        masked = mask_inline_code(line)

        assert len(masked) == len(line)
        assert masked == "a" + " " * 7 + "d"

    def test_unbalanced_backtick_untouched(self) -> None:
        """测试不成对的反引号"""
        assert strip_inline_code("a ` b") == "a ` b"
