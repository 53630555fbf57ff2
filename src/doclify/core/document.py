"""Document - 被检查文档的多视图表示"""

from __future__ import annotations

from dataclasses import dataclass, field

from doclify.core.fences import FenceLine, classify_fences, strip_inline_code
from doclify.core.finding import ContextLines
from doclify.core.patterns import MarkdownPatterns, heading_level, is_list_item, mask_directives


def find_frontmatter_end(lines: list[str]) -> int | None:
    """返回 frontmatter 结束分隔线的下标（0-based），没有则返回 None

    第一个非空行必须是 `key: value` 形式，否则开头的 `---` 只是分隔线。
    """
    if not lines or lines[0].rstrip() != "---":
        return None
    seen_key = False
    for idx in range(1, len(lines)):
        line = lines[idx]
        if line.rstrip() in ("---", "..."):
            return idx
        if not seen_key and line.strip():
            if not MarkdownPatterns.FRONTMATTER_KEY.match(line):
                return None
            seen_key = True
    return None


def find_list_runs(lines: list[str], kinds: list[FenceLine], frontmatter_end: int | None) -> list[bool]:
    """标记每一行是否属于连续的列表块

    列表块 = 连续的列表项，加上紧随其后的缩进续行。
    围栏代码和 frontmatter 中的行不属于列表。
    """
    first_body = 0 if frontmatter_end is None else frontmatter_end + 1
    in_list = [False] * len(lines)
    for idx, line in enumerate(lines):
        if idx < first_body or kinds[idx].is_code:
            continue
        if is_list_item(line):
            in_list[idx] = True
        elif idx > 0 and in_list[idx - 1] and MarkdownPatterns.CONTINUATION.match(line):
            in_list[idx] = True
    return in_list


@dataclass
class Document:
    """文档的三种行视图

    - raw_lines: 原始行
    - lines: 剥离围栏代码后的行（代码行变为空串，行数不变）
    - clean_lines: 在 lines 基础上再遮盖抑制指令、移除行内代码

    三个视图长度相同，下标 i 对应第 i+1 行。

    Attributes:
        content: 原始内容
        source: 来源文件标识（写入 Finding.source）
    """

    content: str
    source: str | None = None

    raw_lines: list[str] = field(init=False, repr=False)
    lines: list[str] = field(init=False, repr=False)
    clean_lines: list[str] = field(init=False, repr=False)
    fence_kinds: list[FenceLine] = field(init=False, repr=False)
    frontmatter_end: int | None = field(init=False, repr=False)

    def __post_init__(self):
        self.raw_lines = self.content.split("\n")
        self.fence_kinds = classify_fences(self.raw_lines)
        self.lines = [
            "" if kind.is_code else line
            for line, kind in zip(self.raw_lines, self.fence_kinds)
        ]
        self.clean_lines = [strip_inline_code(mask_directives(line)) for line in self.lines]
        self.frontmatter_end = find_frontmatter_end(self.raw_lines)

    def __len__(self) -> int:
        return len(self.raw_lines)

    @property
    def body_lines(self) -> list[str]:
        """不含末尾换行产生的空元素的原始行"""
        if len(self.raw_lines) > 1 and self.raw_lines[-1] == "":
            return self.raw_lines[:-1]
        return self.raw_lines

    def headings(self) -> list[tuple[int, int]]:
        """[(下标, 级别), ...]，基于剥离视图"""
        result = []
        for idx, line in enumerate(self.lines):
            level = heading_level(line)
            if level is not None:
                result.append((idx, level))
        return result

    def list_runs(self) -> list[bool]:
        return find_list_runs(self.lines, self.fence_kinds, self.frontmatter_end)

    def is_blank(self, idx: int) -> bool:
        """第 idx 行（原始视图）是否为空行"""
        return not self.raw_lines[idx].strip()

    def follows_frontmatter(self, idx: int) -> bool:
        """第 idx 行是否紧跟在 frontmatter 结束分隔线之后"""
        return self.frontmatter_end is not None and idx - 1 == self.frontmatter_end

    def get_context_lines(self, line: int, before: int = 3, after: int = 3) -> ContextLines:
        """获取指定行的上下文

        Args:
            line: 目标行号（1-based）
            before: 前面的行数
            after: 后面的行数
        """
        lines = self.raw_lines
        line_idx = line - 1

        start = max(0, line_idx - before)
        end = min(len(lines), line_idx + after + 1)

        before_lines = [(i + 1, lines[i]) for i in range(start, line_idx)]
        current_line = (line, lines[line_idx] if 0 <= line_idx < len(lines) else "")
        after_lines = [(i + 1, lines[i]) for i in range(line_idx + 1, end)]

        return ContextLines(before=before_lines, current=current_line, after=after_lines)
