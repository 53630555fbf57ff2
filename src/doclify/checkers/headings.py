"""标题相关规则"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from doclify.core.catalog import normalize_finding
from doclify.core.patterns import MarkdownPatterns, heading_level

if TYPE_CHECKING:
    from doclify.core.checker import CheckOptions
    from doclify.core.document import Document
    from doclify.core.finding import Finding

TRAILING_PUNCTUATION = ".,:;!"


def heading_text(line: str) -> str | None:
    """标题文本（去掉结尾的闭合 #）"""
    match = MarkdownPatterns.HEADING_TEXT.match(line)
    if match is None:
        return None
    return MarkdownPatterns.CLOSING_HASHES.sub("", match.group(2)).strip()


def check_single_h1(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """恰好一个 H1；多个时只报告一次（聚合所有行号）"""
    h1_lines = [idx + 1 for idx, line in enumerate(doc.lines) if MarkdownPatterns.H1.match(line)]

    if not h1_lines:
        yield normalize_finding("single-h1", "Missing H1 heading.", 1, doc.source)
    elif len(h1_lines) > 1:
        line_list = ", ".join(str(n) for n in h1_lines)
        yield normalize_finding(
            "single-h1",
            f"Found {len(h1_lines)} H1 headings (expected 1) at lines {line_list}.",
            h1_lines[0],
            doc.source,
        )


def check_heading_hierarchy(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """标题级别不能跳级（H1 -> H3）；降级不算跳级"""
    prev_level = 0
    for idx, level in doc.headings():
        if prev_level > 0 and level > prev_level + 1:
            yield normalize_finding(
                "heading-hierarchy",
                f"Heading level skipped: H{prev_level} -> H{level} (expected H{prev_level + 1}).",
                idx + 1,
                doc.source,
            )
        prev_level = level


def check_duplicate_heading(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """重复标题

    H1/H2 全局唯一；H3-H6 只在同一父级章节内唯一。
    """
    seen: dict[str, int] = {}
    parents = [""] * 7  # 下标 1-6 对应标题级别

    for idx, line in enumerate(doc.lines):
        match = MarkdownPatterns.HEADING_TEXT.match(line)
        if match is None:
            continue
        level = len(match.group(1))
        display = match.group(2).strip()
        text = display.lower()

        parents[level] = text
        for deeper in range(level + 1, 7):
            parents[deeper] = ""

        if level <= 2:
            key = f"{level}:{text}"
        else:
            scope = "|".join(parents[1:level])
            key = f"{scope}|{level}:{text}"

        if key in seen:
            yield normalize_finding(
                "duplicate-heading",
                f'Duplicate heading "{display}" (also at line {seen[key]}).',
                idx + 1,
                doc.source,
            )
        else:
            seen[key] = idx + 1


def check_missing_space_atx(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """`#Heading` 缺少空格"""
    for idx, line in enumerate(doc.lines):
        match = MarkdownPatterns.MISSING_SPACE_ATX.match(line)
        if match:
            yield normalize_finding(
                "no-missing-space-atx",
                f'Missing space after "{match.group(1)}" in heading.',
                idx + 1,
                doc.source,
            )


def check_heading_start_left(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    for idx, line in enumerate(doc.lines):
        if MarkdownPatterns.INDENTED_HEADING.match(line):
            yield normalize_finding(
                "heading-start-left",
                "Heading is indented; headings must start at the beginning of the line.",
                idx + 1,
                doc.source,
            )


def check_trailing_punctuation(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    for idx, line in enumerate(doc.lines):
        text = heading_text(line)
        if text and text[-1] in TRAILING_PUNCTUATION:
            yield normalize_finding(
                "no-trailing-punctuation-heading",
                f'Heading ends with punctuation "{text[-1]}".',
                idx + 1,
                doc.source,
            )


def check_blanks_around_headings(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """标题前后需要空行（文档边界、frontmatter 结束之后除外）"""
    last = len(doc) - 1
    for idx, _level in doc.headings():
        if idx > 0 and not doc.is_blank(idx - 1) and not doc.follows_frontmatter(idx):
            yield normalize_finding(
                "blanks-around-headings",
                "Heading should be preceded by a blank line.",
                idx + 1,
                doc.source,
            )
        if idx < last and not doc.is_blank(idx + 1):
            yield normalize_finding(
                "blanks-around-headings",
                "Heading should be followed by a blank line.",
                idx + 1,
                doc.source,
            )


def check_empty_sections(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """标题之后直到下一个同级或更高级标题之间没有任何内容

    紧跟的更深层子标题算作内容。
    """
    total = len(doc)
    for idx, level in doc.headings():
        empty = True
        for nxt in range(idx + 1, total):
            if doc.is_blank(nxt):
                continue
            next_level = heading_level(doc.lines[nxt])
            empty = next_level is not None and next_level <= level
            break
        if empty:
            yield normalize_finding(
                "no-empty-sections",
                "Section has no content before the next heading.",
                idx + 1,
                doc.source,
            )
