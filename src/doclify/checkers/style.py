"""风格一致性规则

列表标记和链接标题引号两条规则采用多数投票：先统计全文，再标记少数派。
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from typing import TYPE_CHECKING

from doclify.core.catalog import normalize_finding
from doclify.core.patterns import MarkdownPatterns, split_list_prefix

if TYPE_CHECKING:
    from doclify.core.checker import CheckOptions
    from doclify.core.document import Document
    from doclify.core.finding import Finding


def majority(tally: Counter[str]) -> str | None:
    """出现次数最多的值；并列时取迭代中最先达到最大值的那个

    Counter 保留插入顺序，因此结果只取决于各值首次出现的先后。
    """
    best: str | None = None
    best_count = 0
    for value, count in tally.items():
        if count > best_count:
            best, best_count = value, count
    return best


def check_space_in_emphasis(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """`** text **` / `* text *` 标记内侧的空格"""
    for idx, line in enumerate(doc.lines):
        _prefix, body = split_list_prefix(line)
        for match in MarkdownPatterns.EMPHASIS.finditer(body):
            if match.group(2) or match.group(4):
                yield normalize_finding(
                    "no-space-in-emphasis",
                    f"Spaces inside emphasis markers: {match.group()}",
                    idx + 1,
                    doc.source,
                )


def _bullet_lines(doc: Document) -> list[tuple[int, str]]:
    first_body = 0 if doc.frontmatter_end is None else doc.frontmatter_end + 1
    result = []
    for idx, line in enumerate(doc.raw_lines):
        if idx < first_body or doc.fence_kinds[idx].is_code:
            continue
        if MarkdownPatterns.THEMATIC_BREAK.match(line):
            continue
        match = MarkdownPatterns.BULLET.match(line)
        if match:
            result.append((idx, match.group(1)))
    return result


def check_list_marker_consistency(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    bullets = _bullet_lines(doc)
    expected = majority(Counter(marker for _idx, marker in bullets))
    if expected is None:
        return
    for idx, marker in bullets:
        if marker != expected:
            yield normalize_finding(
                "list-marker-consistency",
                f'Inconsistent list marker "{marker}" (expected "{expected}").',
                idx + 1,
                doc.source,
            )


def check_link_title_style(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    titles = [
        (idx, match.group(1))
        for idx, line in enumerate(doc.lines)
        for match in MarkdownPatterns.LINK_TITLE.finditer(line)
    ]
    expected = majority(Counter(quote for _idx, quote in titles))
    if expected is None:
        return
    for idx, quote in titles:
        if quote != expected:
            yield normalize_finding(
                "link-title-style",
                f"Inconsistent link title quote {quote} (expected {expected}).",
                idx + 1,
                doc.source,
            )
