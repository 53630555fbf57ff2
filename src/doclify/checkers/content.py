"""内容规则：frontmatter、行长度、占位符、行内 HTML"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING

from doclify.core.catalog import normalize_finding
from doclify.core.patterns import MarkdownPatterns

if TYPE_CHECKING:
    from doclify.core.checker import CheckOptions
    from doclify.core.document import Document
    from doclify.core.finding import Finding

# (正则, 说明)，按顺序逐个检查；同一行命中多个标记时各自报告
PLACEHOLDER_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bTODO\b", re.I), "TODO marker found - remove before publishing"),
    (re.compile(r"\bFIXME\b", re.I), "FIXME marker found - remove before publishing"),
    (re.compile(r"\bHACK\b", re.I), "HACK marker found - remove before publishing"),
    (re.compile(r"\bTBD\b", re.I), "TBD (to be determined) marker found"),
    (re.compile(r"\bWIP\b", re.I), "WIP (work in progress) marker found"),
    (re.compile(r"\bCHANGEME\b", re.I), "CHANGEME marker found - update before publishing"),
    (re.compile(r"\bPLACEHOLDER\b", re.I), "PLACEHOLDER marker found - replace with actual content"),
    (re.compile(r"\[insert\s+here\]", re.I), '"[insert here]" placeholder found'),
    (re.compile(r"lorem ipsum", re.I), "Lorem ipsum placeholder text found"),
    (re.compile(r"\bxxx\b", re.I), '"xxx" placeholder found'),
)


def check_frontmatter(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """需要 YAML frontmatter（可选规则）"""
    if options.check_frontmatter and not doc.content.startswith("---\n"):
        yield normalize_finding(
            "frontmatter",
            "Missing frontmatter block at the beginning of the file.",
            1,
            doc.source,
        )


def check_line_length(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """基于原始行：代码块中的行同样可能过长"""
    limit = options.max_line_length
    for idx, line in enumerate(doc.raw_lines):
        if len(line) > limit:
            yield normalize_finding(
                "line-length",
                f"Line exceeds {limit} characters ({len(line)}).",
                idx + 1,
                doc.source,
            )


def check_placeholders(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    for idx, line in enumerate(doc.clean_lines):
        for pattern, message in PLACEHOLDER_PATTERNS:
            if pattern.search(line):
                yield normalize_finding("placeholder", message, idx + 1, doc.source)


def check_inline_html(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """行内 HTML 标签（可选规则，HTML 注释不算）"""
    if not options.check_inline_html:
        return
    for idx, line in enumerate(doc.clean_lines):
        for match in MarkdownPatterns.HTML_TAG.finditer(line):
            yield normalize_finding(
                "no-inline-html",
                f"Inline HTML found: <{match.group(1)}>.",
                idx + 1,
                doc.source,
            )
