"""Engine - 规则求值与结果过滤

流程：
1. 构建 Document（原始 / 剥离 / 去行内代码三种视图）
2. 整文件指令（不带规则 ID 时直接返回空结果）
3. 从剥离视图构建行级抑制表
4. 按顺序求值所有规则（内置 + 自定义）
5. 按严重程度归类，再用抑制表和整文件指令过滤
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from doclify.checkers import BUILTIN_RULES
from doclify.core.checker import CheckOptions, RuleEntry
from doclify.core.document import Document
from doclify.core.finding import LintResult
from doclify.core.suppression import build_suppression_map, find_file_directive

if TYPE_CHECKING:
    from doclify.core.checker import CustomRule
    from doclify.core.finding import Finding

logger = logging.getLogger(__name__)


def build_rule_entries(custom_rules: Iterable[CustomRule] = ()) -> list[RuleEntry]:
    """内置规则在前，自定义规则按给定顺序追加"""
    return [*BUILTIN_RULES, *(RuleEntry.from_custom(rule) for rule in custom_rules)]


def check_markdown(
    content: str,
    *,
    max_line_length: int = 160,
    file_path: str | None = None,
    check_frontmatter: bool = False,
    check_inline_html: bool = False,
    custom_rules: Iterable[CustomRule] = (),
) -> LintResult:
    """检查一篇 Markdown 文档

    Args:
        content: 文档内容
        max_line_length: 行长度上限
        file_path: 写入 Finding.source 的来源标识
        check_frontmatter: 是否要求 frontmatter
        check_inline_html: 是否检查行内 HTML
        custom_rules: 已编译的自定义规则

    Returns:
        按严重程度归类的检查结果
    """
    doc = Document(content, source=file_path)

    directive = find_file_directive("\n".join(doc.lines))
    if directive is not None and directive.disables_all:
        logger.info("All rules disabled by file directive: %s", file_path or "<input>")
        return LintResult()

    suppression = build_suppression_map(doc.lines)
    options = CheckOptions(
        max_line_length=max_line_length,
        check_frontmatter=check_frontmatter,
        check_inline_html=check_inline_html,
    )

    raw = LintResult()
    for entry in build_rule_entries(custom_rules):
        raw.extend(entry.evaluate(doc, options))

    def keep(finding: Finding) -> bool:
        if suppression.is_suppressed(finding):
            return False
        return directive is None or not directive.suppresses(finding)

    result = LintResult(
        errors=[f for f in raw.errors if keep(f)],
        warnings=[f for f in raw.warnings if keep(f)],
    )
    logger.debug(
        "%s: %d error(s), %d warning(s), %d suppressed",
        file_path or "<input>",
        len(result.errors),
        len(result.warnings),
        len(raw.findings) - len(result.findings),
    )
    return result
