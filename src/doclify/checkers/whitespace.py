"""空白与结构规则：行尾空白、空行、列表与代码块周围的空行"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from doclify.core.catalog import normalize_finding
from doclify.core.fences import FENCE_OPEN, FenceLine
from doclify.core.patterns import MarkdownPatterns

if TYPE_CHECKING:
    from doclify.core.checker import CheckOptions
    from doclify.core.document import Document
    from doclify.core.finding import Finding


def check_trailing_spaces(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    for idx, line in enumerate(doc.raw_lines):
        if MarkdownPatterns.TRAILING_SPACE.search(line):
            yield normalize_finding("no-trailing-spaces", "Trailing whitespace.", idx + 1, doc.source)


def check_multiple_blanks(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """连续空行中第二个及之后的空行"""
    run = 0
    for idx, line in enumerate(doc.body_lines):
        if line.strip():
            run = 0
            continue
        run += 1
        if run > 1:
            yield normalize_finding(
                "no-multiple-blanks",
                "Multiple consecutive blank lines.",
                idx + 1,
                doc.source,
            )


def check_trailing_newline(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    content = doc.content
    if not content:
        return
    if not content.endswith("\n"):
        yield normalize_finding(
            "single-trailing-newline",
            "File should end with a single newline.",
            len(doc.raw_lines),
            doc.source,
        )
    elif content.endswith("\n\n"):
        first_extra = len(content.rstrip("\n").split("\n")) + 1
        yield normalize_finding(
            "single-trailing-newline",
            "File ends with multiple trailing newlines.",
            first_extra,
            doc.source,
        )


def check_blanks_around_lists(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """连续列表块的首行之前、末行之后需要空行"""
    in_list = doc.list_runs()
    last = len(doc) - 1
    for idx, member in enumerate(in_list):
        if not member:
            continue
        starts = idx == 0 or not in_list[idx - 1]
        ends = idx == last or not in_list[idx + 1]
        if starts and idx > 0 and not doc.is_blank(idx - 1) and not doc.follows_frontmatter(idx):
            yield normalize_finding(
                "blanks-around-lists",
                "List should be preceded by a blank line.",
                idx + 1,
                doc.source,
            )
        if ends and idx < last and not doc.is_blank(idx + 1):
            yield normalize_finding(
                "blanks-around-lists",
                "List should be followed by a blank line.",
                idx + 1,
                doc.source,
            )


def check_blanks_around_fences(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """开启围栏之前、关闭围栏之后需要空行"""
    last = len(doc) - 1
    for idx, kind in enumerate(doc.fence_kinds):
        if (
            kind is FenceLine.OPEN
            and idx > 0
            and not doc.is_blank(idx - 1)
            and not doc.follows_frontmatter(idx)
        ):
            yield normalize_finding(
                "blanks-around-fences",
                "Fenced code block should be preceded by a blank line.",
                idx + 1,
                doc.source,
            )
        elif kind is FenceLine.CLOSE and idx < last and not doc.is_blank(idx + 1):
            yield normalize_finding(
                "blanks-around-fences",
                "Fenced code block should be followed by a blank line.",
                idx + 1,
                doc.source,
            )


def check_fenced_code_language(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """开围栏由围栏状态机判定：代码块内不同字符的围栏行只是内容"""
    for idx, kind in enumerate(doc.fence_kinds):
        if kind is not FenceLine.OPEN:
            continue
        line = doc.raw_lines[idx]
        match = FENCE_OPEN.match(line)
        assert match is not None
        if not line[match.end() :].strip():
            yield normalize_finding(
                "fenced-code-language",
                "Fenced code block should specify a language.",
                idx + 1,
                doc.source,
            )
