"""Fences - 围栏代码块与行内代码跟踪

所有需要避开代码区域的规则和修复器都通过这里判断一行是否位于
围栏代码块内。围栏按 CommonMark 规则匹配：

- 开启：行首 3 个以上反引号或波浪线
- 关闭：相同字符、长度不小于开启长度、其后只有空白
- 未闭合的围栏一直延续到文档末尾
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

FENCE_OPEN = re.compile(r"^(`{3,}|~{3,})")
FENCE_CLOSE = re.compile(r"^(`{3,}|~{3,})\s*$")
INLINE_CODE = re.compile(r"`[^`]+`")


class FenceLine(Enum):
    """单行的围栏分类"""

    TEXT = "text"  # 围栏外
    OPEN = "open"  # 开启围栏的行
    BODY = "body"  # 围栏内部
    CLOSE = "close"  # 关闭围栏的行

    @property
    def is_code(self) -> bool:
        """是否属于代码块（含围栏行本身）"""
        return self is not FenceLine.TEXT


@dataclass
class FenceState:
    """围栏扫描状态"""

    in_fence: bool = False
    fence_char: str = ""
    fence_len: int = 0

    def feed(self, line: str) -> FenceLine:
        """读入一行，返回该行的分类并推进状态"""
        if not self.in_fence:
            match = FENCE_OPEN.match(line)
            if match is None:
                return FenceLine.TEXT
            marker = match.group(1)
            self.in_fence = True
            self.fence_char = marker[0]
            self.fence_len = len(marker)
            return FenceLine.OPEN

        match = FENCE_CLOSE.match(line)
        if match is not None:
            marker = match.group(1)
            # 字符不同的围栏永不兼容；较短的同类围栏视为代码内容
            if marker[0] == self.fence_char and len(marker) >= self.fence_len:
                self.in_fence = False
                self.fence_char = ""
                self.fence_len = 0
                return FenceLine.CLOSE
        return FenceLine.BODY


def classify_fences(lines: list[str]) -> list[FenceLine]:
    """逐行分类（与输入行一一对应）"""
    state = FenceState()
    return [state.feed(line) for line in lines]


def strip_fenced_blocks(content: str) -> str:
    """将围栏代码块内的行（含围栏行）替换为空行

    行数保持不变，因此基于剥离视图得到的行号与原文一致。
    """
    lines = content.split("\n")
    kinds = classify_fences(lines)
    return "\n".join("" if kind.is_code else line for line, kind in zip(lines, kinds))


def strip_inline_code(line: str) -> str:
    """移除行内代码片段"""
    return INLINE_CODE.sub("", line)


def mask_inline_code(line: str) -> str:
    """用等长空格遮盖行内代码片段

    遮盖后的行与原行长度一致，在遮盖行上得到的匹配位置可直接用于编辑原行。
    """
    return INLINE_CODE.sub(lambda m: " " * len(m.group()), line)
