"""链接与图片规则"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from doclify.core.catalog import normalize_finding
from doclify.core.patterns import (
    MarkdownPatterns,
    find_bare_urls,
    strip_query_and_fragment,
    trim_url,
)

if TYPE_CHECKING:
    from doclify.core.checker import CheckOptions
    from doclify.core.document import Document
    from doclify.core.finding import Finding


def _insecure(url: str, line_num: int, doc: Document) -> Finding:
    return normalize_finding(
        "insecure-link",
        f"Insecure link found: {url} - use https:// instead",
        line_num,
        doc.source,
    )


def check_insecure_links(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """http:// 链接

    三种形式按优先级互斥，避免重复计数：
    1. 行内链接 [text](http://...)，存在时不再扫描裸 URL
    2. 引用定义 [label]: http://...
    3. 其余情况下的裸 http:// URL
    """
    for idx, line in enumerate(doc.clean_lines):
        line_num = idx + 1

        inline = MarkdownPatterns.INSECURE_INLINE.findall(line)
        for url in inline:
            yield _insecure(url, line_num, doc)

        reference = MarkdownPatterns.INSECURE_REFERENCE.match(line)
        if reference:
            yield _insecure(reference.group(1), line_num, doc)

        if not inline and not reference:
            for match in MarkdownPatterns.INSECURE_BARE.finditer(line):
                yield _insecure(trim_url(match.group()), line_num, doc)


def check_empty_links(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """[](url) 与 [text]() 分别报告；![](url) 属于 img-alt"""
    for idx, line in enumerate(doc.clean_lines):
        if MarkdownPatterns.EMPTY_LINK_TEXT.search(line):
            yield normalize_finding("empty-link", "Link has empty text: [](url).", idx + 1, doc.source)
        if MarkdownPatterns.EMPTY_LINK_URL.search(line):
            yield normalize_finding("empty-link", "Link has empty URL: [text]().", idx + 1, doc.source)


def check_image_alt(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    for idx, line in enumerate(doc.clean_lines):
        if MarkdownPatterns.IMAGE_NO_ALT.search(line):
            yield normalize_finding("img-alt", "Image missing alt text: ![](url).", idx + 1, doc.source)


def check_bare_urls(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    for idx, line in enumerate(doc.clean_lines):
        for start, end in find_bare_urls(line):
            yield normalize_finding(
                "no-bare-urls",
                f"Bare URL used: {line[start:end]} - wrap it in <> or use link syntax.",
                idx + 1,
                doc.source,
            )


def check_reversed_links(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """(text)[url] 写反了的链接"""
    for idx, line in enumerate(doc.lines):
        for match in MarkdownPatterns.REVERSED_LINK.finditer(line):
            # [a](b)[c] 中的 (b)[c] 不是反向链接
            if match.start() > 0 and line[match.start() - 1] == "]":
                continue
            yield normalize_finding(
                "no-reversed-links",
                f"Reversed link syntax: {match.group()} - use [{match.group(1)}]({match.group(2)}).",
                idx + 1,
                doc.source,
            )


def check_space_in_links(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """[ text ](url) / [text]( url ) 首尾空白"""
    for idx, line in enumerate(doc.lines):
        for match in MarkdownPatterns.LINK_PARTS.finditer(line):
            text, url = match.group(1), match.group(2)
            if text != text.strip() or url != url.strip():
                yield normalize_finding(
                    "no-space-in-links",
                    f"Spaces inside link delimiters: {match.group()}",
                    idx + 1,
                    doc.source,
                )


def check_duplicate_links(doc: Document, options: CheckOptions) -> Iterator[Finding]:
    """同一 URL（忽略查询串和锚点）在文档中重复出现"""
    seen: dict[str, int] = {}
    for idx, line in enumerate(doc.clean_lines):
        urls = [m.group(1) for m in MarkdownPatterns.INLINE_LINK_TARGET.finditer(line)]
        urls.extend(m.group()[1:-1] for m in MarkdownPatterns.AUTOLINK.finditer(line))
        for url in urls:
            key = strip_query_and_fragment(url)
            if not key:
                continue
            if key in seen:
                yield normalize_finding(
                    "no-duplicate-links",
                    f"Duplicate link: {url} (first used at line {seen[key]}).",
                    idx + 1,
                    doc.source,
                )
            else:
                seen[key] = idx + 1
