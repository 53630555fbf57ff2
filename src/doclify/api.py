"""API - 编程接口

    from doclify.api import fix, lint, score

    result = lint("# Hello\\n\\nWorld\\n")
    fixed = fix("##Bad heading\\n")
    value = score(errors=0, warnings=3)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from doclify.core.catalog import RULE_CATALOG, resolve_rule_id
from doclify.engine import check_markdown
from doclify.fixers.base import Change, FixResult, LinkChange
from doclify.fixers.formatting import auto_fix_formatting
from doclify.fixers.links import auto_fix_insecure_links
from doclify.quality import compute_health_score

if TYPE_CHECKING:
    from doclify.core.checker import CustomRule
    from doclify.core.finding import Finding


@dataclass
class LintReport:
    """lint() 的返回值"""

    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    health_score: int = 100
    passed: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "errors": [f.to_dict() for f in self.errors],
            "warnings": [f.to_dict() for f in self.warnings],
            "healthScore": self.health_score,
            "pass": self.passed,
        }


def lint(
    content: str,
    *,
    max_line_length: int = 160,
    file_path: str = "<input>",
    check_frontmatter: bool = False,
    check_inline_html: bool = False,
    custom_rules: Iterable[CustomRule] = (),
    ignore_rules: Iterable[str] = (),
    strict: bool = False,
) -> LintReport:
    """检查 Markdown 字符串

    Args:
        ignore_rules: 要忽略的规则 ID（支持别名）
        strict: warning 也视为不通过
    """
    ignore = {resolve_rule_id(rule_id) for rule_id in ignore_rules}
    result = check_markdown(
        content,
        max_line_length=max_line_length,
        file_path=file_path,
        check_frontmatter=check_frontmatter,
        check_inline_html=check_inline_html,
        custom_rules=custom_rules,
    )

    errors = [f for f in result.errors if f.code not in ignore]
    warnings = [f for f in result.warnings if f.code not in ignore]
    return LintReport(
        errors=errors,
        warnings=warnings,
        health_score=compute_health_score(len(errors), len(warnings)),
        passed=not errors and not (strict and warnings),
    )


def fix(content: str) -> FixResult:
    """先升级不安全链接，再修复格式"""
    link_result = auto_fix_insecure_links(content)
    changes: list[Change | LinkChange] = [
        dataclasses.replace(change, rule="insecure-link") for change in link_result.changes
    ]

    format_result = auto_fix_formatting(link_result.content)
    changes.extend(format_result.changes)

    return FixResult(
        content=format_result.content,
        modified=format_result.content != content,
        changes=changes,
    )


def score(errors: int = 0, warnings: int = 0) -> int:
    return compute_health_score(errors, warnings)


__all__ = ["RULE_CATALOG", "LintReport", "fix", "lint", "score"]
