"""Patterns - 共享的 Markdown 正则表达式

规则与修复器必须对“什么是标题 / 列表项 / 裸 URL”达成一致，
否则修复后的内容仍会被报告，因此这些判断集中在此处。
"""

from __future__ import annotations

import re
from typing import ClassVar


class MarkdownPatterns:
    """Markdown 行级匹配正则集合"""

    # ATX 标题
    HEADING: ClassVar[re.Pattern[str]] = re.compile(r"^(#{1,6})\s")
    HEADING_TEXT: ClassVar[re.Pattern[str]] = re.compile(r"^(#{1,6})\s+(.+)$")
    HEADING_PARTS: ClassVar[re.Pattern[str]] = re.compile(r"^(#{1,6}[ \t]+)(.*)$")
    H1: ClassVar[re.Pattern[str]] = re.compile(r"^#\s")
    MISSING_SPACE_ATX: ClassVar[re.Pattern[str]] = re.compile(r"^(#{1,6})([^\s#])")
    INDENTED_HEADING: ClassVar[re.Pattern[str]] = re.compile(r"^([ \t]+)(#{1,6})(?=\s|$)")
    CLOSING_HASHES: ClassVar[re.Pattern[str]] = re.compile(r"\s+#+\s*$")

    # 列表
    LIST_ITEM: ClassVar[re.Pattern[str]] = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+")
    BULLET: ClassVar[re.Pattern[str]] = re.compile(r"^\s*([-*+])\s+")
    THEMATIC_BREAK: ClassVar[re.Pattern[str]] = re.compile(r"^\s{0,3}([-*_])(?:\s*\1){2,}\s*$")
    CONTINUATION: ClassVar[re.Pattern[str]] = re.compile(r"^[ \t]+\S")

    # 链接
    REFERENCE_DEF: ClassVar[re.Pattern[str]] = re.compile(r"^\s{0,3}\[[^\]]+\]:\s*(\S+)")
    LINK_SPAN: ClassVar[re.Pattern[str]] = re.compile(r"!?\[[^\]]*\]\([^)]*\)")
    AUTOLINK: ClassVar[re.Pattern[str]] = re.compile(r"<[A-Za-z][A-Za-z0-9+.-]*:[^\s<>]*>")
    BARE_URL: ClassVar[re.Pattern[str]] = re.compile(r"https?://[^\s<>()\[\]\"'`]+")
    INLINE_LINK_TARGET: ClassVar[re.Pattern[str]] = re.compile(
        r"(?<!!)\[[^\]]*\]\(\s*<?([^\s()<>]+)>?(?:\s+[\"'][^\"']*[\"'])?\s*\)"
    )
    LINK_TITLE: ClassVar[re.Pattern[str]] = re.compile(r"\]\([^\s()]+\s+([\"'])(.*?)\1\s*\)")
    LINK_PARTS: ClassVar[re.Pattern[str]] = re.compile(r"(?<!!)\[([^\[\]]*)\]\(([^()]*)\)")
    REVERSED_LINK: ClassVar[re.Pattern[str]] = re.compile(r"\(([^()]+)\)\[([^\[\]]+)\]")

    # 不安全链接（三种互斥形式）
    INSECURE_INLINE: ClassVar[re.Pattern[str]] = re.compile(r"\[[^\]]*?\]\((http://[^)\s]+)[^)]*\)")
    INSECURE_REFERENCE: ClassVar[re.Pattern[str]] = re.compile(r"^\[[^\]]*?\]:\s*(http://\S+)")
    INSECURE_BARE: ClassVar[re.Pattern[str]] = re.compile(r"\bhttp://\S+")

    # 空链接 / 图片
    EMPTY_LINK_TEXT: ClassVar[re.Pattern[str]] = re.compile(r"(?<!!)\[\]\([^)]+\)")
    EMPTY_LINK_URL: ClassVar[re.Pattern[str]] = re.compile(r"(?<!!)\[[^\]]+\]\(\s*\)")
    IMAGE_NO_ALT: ClassVar[re.Pattern[str]] = re.compile(r"!\[\]\([^)]+\)")

    # 强调：** text ** / * text *
    EMPHASIS: ClassVar[re.Pattern[str]] = re.compile(
        r"(?<!\*)(\*{1,2})(?!\*)( *)([^*\s](?:[^*]*?[^*\s])?)( *)\1(?!\*)"
    )

    # HTML 开标签 / 自闭合标签（注释、闭合标签、autolink 不匹配）
    HTML_TAG: ClassVar[re.Pattern[str]] = re.compile(r"<([A-Za-z][A-Za-z0-9-]*)(?:\s[^<>]*)?/?>")

    # frontmatter 键
    FRONTMATTER_KEY: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Za-z_][\w.-]*\s*:(?:\s|$)")

    # doclify 抑制指令注释
    DIRECTIVE_COMMENT: ClassVar[re.Pattern[str]] = re.compile(r"<!--\s*doclify-[a-z-]+\b.*?-->")

    TRAILING_SPACE: ClassVar[re.Pattern[str]] = re.compile(r"[ \t]+$")
    URL_TRAILING_PUNCT: ClassVar[re.Pattern[str]] = re.compile(r"[),.;!?>]+$")
    BARE_URL_TRAILING_PUNCT: ClassVar[re.Pattern[str]] = re.compile(r"[.,;:!?]+$")


def heading_level(line: str) -> int | None:
    """ATX 标题级别（1-6），非标题返回 None"""
    match = MarkdownPatterns.HEADING.match(line)
    return len(match.group(1)) if match else None


def mask_directives(line: str) -> str:
    """用等长空格遮盖 doclify 指令注释，内容规则不会匹配到指令里的规则 ID"""
    return MarkdownPatterns.DIRECTIVE_COMMENT.sub(lambda m: " " * len(m.group()), line)


def is_list_item(line: str) -> bool:
    """列表项（排除 `* * *` 之类的分隔线）"""
    if MarkdownPatterns.THEMATIC_BREAK.match(line):
        return False
    return MarkdownPatterns.LIST_ITEM.match(line) is not None


def split_list_prefix(line: str) -> tuple[str, str]:
    """拆分列表标记前缀，避免把 `* item` 的标记当作强调"""
    match = MarkdownPatterns.LIST_ITEM.match(line)
    if match is None or MarkdownPatterns.THEMATIC_BREAK.match(line):
        return "", line
    return line[: match.end()], line[match.end() :]


def trim_url(url: str) -> str:
    """去除 URL 末尾的标点（句号、右括号等）"""
    return MarkdownPatterns.URL_TRAILING_PUNCT.sub("", url)


def strip_query_and_fragment(url: str) -> str:
    return re.split(r"[?#]", url, maxsplit=1)[0]


def _protected_spans(line: str) -> list[tuple[int, int]]:
    spans = [m.span() for m in MarkdownPatterns.LINK_SPAN.finditer(line)]
    spans.extend(m.span() for m in MarkdownPatterns.AUTOLINK.finditer(line))
    return spans


def find_bare_urls(line: str) -> list[tuple[int, int]]:
    """查找裸 URL 的位置 [(start, end), ...]

    跳过：
    - `[text](url)` / `![alt](url)` 内部
    - `<url>` autolink 内部
    - 紧跟在 `(` `<` `"` `'` `=` 之后（链接目标、HTML 属性值）
    - 引用定义行 `[label]: url`

    end 不含 URL 末尾的句读标点。
    """
    if MarkdownPatterns.REFERENCE_DEF.match(line):
        return []

    spans = _protected_spans(line)
    result: list[tuple[int, int]] = []
    for match in MarkdownPatterns.BARE_URL.finditer(line):
        start = match.start()
        if start > 0 and line[start - 1] in "(<\"'=":
            continue
        if any(s <= start < e for s, e in spans):
            continue
        url = MarkdownPatterns.BARE_URL_TRAILING_PUNCT.sub("", match.group())
        if url.endswith("://"):
            continue
        result.append((start, start + len(url)))
    return result
