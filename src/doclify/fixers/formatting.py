"""格式自动修复

两遍处理：

1. 行级替换：逐行做正则替换，不增删行，因此行号与输入一致
2. 结构调整：删除多余空行、在标题 / 列表 / 代码块周围补空行、规范结尾换行

两遍都跳过围栏代码块内部（第二遍重新识别围栏），frontmatter 原样保留。
修复后的内容不会再触发被修复的规则，再次修复不产生任何变化。
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from doclify.core.document import find_frontmatter_end, find_list_runs
from doclify.core.fences import FenceLine, classify_fences, mask_inline_code
from doclify.core.patterns import MarkdownPatterns, find_bare_urls, heading_level, split_list_prefix
from doclify.fixers.base import Change, FixResult, sub_outside_code

logger = logging.getLogger(__name__)

TRAILING_PUNCTUATION = ".,:;!"

LineFix = Callable[[str], tuple[str, int]]


def fix_trailing_spaces(line: str) -> tuple[str, int]:
    trimmed = line.rstrip(" \t")
    return trimmed, int(trimmed != line)


def fix_heading_indent(line: str) -> tuple[str, int]:
    match = MarkdownPatterns.INDENTED_HEADING.match(line)
    if match is None:
        return line, 0
    return line[match.end(1) :], 1


def fix_missing_space_atx(line: str) -> tuple[str, int]:
    match = MarkdownPatterns.MISSING_SPACE_ATX.match(line)
    if match is None:
        return line, 0
    return f"{match.group(1)} {line[match.end(1) :]}", 1


def fix_heading_punctuation(line: str) -> tuple[str, int]:
    """去掉标题文本末尾的标点，保留结尾的闭合 #"""
    match = MarkdownPatterns.HEADING_PARTS.match(line)
    if match is None:
        return line, 0
    prefix, rest = match.group(1), match.group(2)

    closing = MarkdownPatterns.CLOSING_HASHES.search(rest)
    text, suffix = (rest[: closing.start()], rest[closing.start() :]) if closing else (rest, "")

    core = text.rstrip()
    if not core or core[-1] not in TRAILING_PUNCTUATION:
        return line, 0
    stripped = core.rstrip(" \t" + TRAILING_PUNCTUATION)
    if not stripped:
        # 只有标点的标题无法修复
        return line, 0
    return prefix + stripped + text[len(core) :] + suffix, 1


def fix_reversed_links(line: str) -> tuple[str, int]:
    def replace(match: re.Match[str]) -> str | None:
        start = match.start()
        if start > 0 and match.string[start - 1] == "]":
            return None
        return f"[{match.group(1)}]({match.group(2)})"

    return sub_outside_code(MarkdownPatterns.REVERSED_LINK, line, replace)


def fix_emphasis_spaces(line: str) -> tuple[str, int]:
    def replace(match: re.Match[str]) -> str | None:
        if not (match.group(2) or match.group(4)):
            return None
        marker = match.group(1)
        return f"{marker}{match.group(3)}{marker}"

    prefix, body = split_list_prefix(line)
    fixed, count = sub_outside_code(MarkdownPatterns.EMPHASIS, body, replace)
    return prefix + fixed, count


def fix_link_spaces(line: str) -> tuple[str, int]:
    def replace(match: re.Match[str]) -> str | None:
        text, url = match.group(1), match.group(2)
        if text == text.strip() and url == url.strip():
            return None
        return f"[{text.strip()}]({url.strip()})"

    return sub_outside_code(MarkdownPatterns.LINK_PARTS, line, replace)


def fix_bare_urls(line: str) -> tuple[str, int]:
    """把裸 URL 包进 <>"""
    spans = find_bare_urls(mask_inline_code(line))
    for start, end in reversed(spans):
        line = f"{line[:start]}<{line[start:end]}>{line[end:]}"
    return line, len(spans)


# (规则 ID, 修复函数)，按顺序应用于围栏外的每一行
LINE_FIXES: tuple[tuple[str, LineFix], ...] = (
    ("no-trailing-spaces", fix_trailing_spaces),
    ("heading-start-left", fix_heading_indent),
    ("no-missing-space-atx", fix_missing_space_atx),
    ("no-trailing-punctuation-heading", fix_heading_punctuation),
    ("no-reversed-links", fix_reversed_links),
    ("no-space-in-emphasis", fix_emphasis_spaces),
    ("no-space-in-links", fix_link_spaces),
    ("no-bare-urls", fix_bare_urls),
)


def _fix_lines(content: str, changes: list[Change]) -> str:
    """第一遍：行级替换"""
    lines = content.split("\n")
    kinds = classify_fences(lines)
    frontmatter_end = find_frontmatter_end(lines)

    for idx, (line, kind) in enumerate(zip(lines, kinds)):
        if frontmatter_end is not None and idx <= frontmatter_end:
            continue
        if kind is FenceLine.BODY:
            continue
        # 围栏行本身只清理行尾空白
        fixes = LINE_FIXES[:1] if kind.is_code else LINE_FIXES
        for rule, fix in fixes:
            line, count = fix(line)
            changes.extend(Change(rule, idx + 1) for _ in range(count))
        lines[idx] = line

    return "\n".join(lines)


def _fix_structure(content: str, changes: list[Change]) -> str:
    """第二遍：空行与结尾换行"""
    if not content:
        return content

    lines = content.rstrip("\n").split("\n")
    kinds = classify_fences(lines)
    frontmatter_end = find_frontmatter_end(lines)
    in_list = find_list_runs(lines, kinds, frontmatter_end)
    last = len(lines) - 1

    out: list[str] = []
    blank_run = 0

    for idx, line in enumerate(lines):
        line_num = idx + 1
        kind = kinds[idx]

        if frontmatter_end is not None and idx <= frontmatter_end:
            out.append(line)
            continue

        if kind is FenceLine.TEXT and not line.strip():
            blank_run += 1
            if blank_run > 1:
                changes.append(Change("no-multiple-blanks", line_num))
            else:
                out.append(line)
            continue
        blank_run = 0

        is_heading = kind is FenceLine.TEXT and heading_level(line) is not None
        list_start = in_list[idx] and (idx == 0 or not in_list[idx - 1])
        list_end = in_list[idx] and (idx == last or not in_list[idx + 1])

        before_rule = None
        if is_heading:
            before_rule = "blanks-around-headings"
        elif list_start:
            before_rule = "blanks-around-lists"
        elif kind is FenceLine.OPEN:
            before_rule = "blanks-around-fences"

        after_frontmatter = frontmatter_end is not None and idx == frontmatter_end + 1
        if before_rule and out and out[-1].strip() and not after_frontmatter:
            out.append("")
            changes.append(Change(before_rule, line_num))

        out.append(line)

        after_rule = None
        if is_heading:
            after_rule = "blanks-around-headings"
        elif kind is FenceLine.CLOSE:
            after_rule = "blanks-around-fences"
        elif list_end:
            after_rule = "blanks-around-lists"

        if after_rule and idx < last and lines[idx + 1].strip():
            out.append("")
            changes.append(Change(after_rule, line_num))

    if not content.endswith("\n") or content.endswith("\n\n"):
        changes.append(Change("single-trailing-newline", len(lines)))

    return "\n".join(out) + "\n"


def auto_fix_formatting(content: str) -> FixResult:
    """修复格式问题

    Returns:
        修复结果；changes 中的行号指向输入内容的行
    """
    changes: list[Change] = []
    fixed = _fix_structure(_fix_lines(content, changes), changes)
    if changes:
        logger.debug("Formatting fixes applied: %d", len(changes))
    return FixResult(content=fixed, modified=fixed != content, changes=list(changes))
