"""Catalog - 规则目录

静态的规则表：规则 ID、默认严重程度和说明。
所有 Finding 都经由 normalize_finding 构造，保证结构一致。
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from doclify.core.exceptions import RuleNotFoundError
from doclify.core.finding import Finding, Severity


@dataclass(frozen=True)
class Rule:
    """规则定义"""

    id: str
    severity: Severity
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "severity": str(self.severity), "description": self.description}


_E = Severity.ERROR
_W = Severity.WARNING

RULE_CATALOG: tuple[Rule, ...] = (
    Rule("frontmatter", _W, "Require YAML frontmatter block"),
    Rule("single-h1", _E, "Exactly one H1 heading per file"),
    Rule("heading-hierarchy", _W, "No skipped heading levels (H2 -> H4)"),
    Rule("duplicate-heading", _W, "No duplicate headings in the same section"),
    Rule("line-length", _W, "Max line length (default: 160 chars)"),
    Rule("placeholder", _W, "No TODO/FIXME/WIP/TBD markers"),
    Rule("insecure-link", _W, "No http:// links (use https://)"),
    Rule("empty-link", _W, "No empty link text or URL"),
    Rule("img-alt", _W, "Images must have alt text"),
    Rule("no-trailing-spaces", _W, "No trailing spaces or tabs"),
    Rule("no-multiple-blanks", _W, "No multiple consecutive blank lines"),
    Rule("single-trailing-newline", _W, "Files end with exactly one newline"),
    Rule("no-missing-space-atx", _W, "Space required after # in ATX headings"),
    Rule("heading-start-left", _W, "Headings must start at the beginning of the line"),
    Rule("no-trailing-punctuation-heading", _W, "No trailing punctuation in headings"),
    Rule("blanks-around-headings", _W, "Headings surrounded by blank lines"),
    Rule("blanks-around-lists", _W, "Lists surrounded by blank lines"),
    Rule("blanks-around-fences", _W, "Fenced code blocks surrounded by blank lines"),
    Rule("fenced-code-language", _W, "Fenced code blocks declare a language"),
    Rule("no-bare-urls", _W, "No bare URLs (wrap in <> or link syntax)"),
    Rule("no-reversed-links", _W, "No reversed link syntax (text)[url]"),
    Rule("no-space-in-emphasis", _W, "No spaces inside emphasis markers"),
    Rule("no-space-in-links", _W, "No spaces inside link text or URL"),
    Rule("no-inline-html", _W, "No inline HTML (opt-in)"),
    Rule("no-empty-sections", _W, "Headings must be followed by content"),
    Rule("no-duplicate-links", _W, "No repeated link URLs"),
    Rule("list-marker-consistency", _W, "Consistent bullet list markers"),
    Rule("link-title-style", _W, "Consistent quote style in link titles"),
    Rule("dead-link", _E, "No broken links (requires --check-links)"),
    Rule("stale-doc", _W, "Warn on stale docs (requires --check-freshness)"),
)

RULE_SEVERITY: MappingProxyType[str, Severity] = MappingProxyType(
    {rule.id: rule.severity for rule in RULE_CATALOG}
)

# 旧名称 / 别名 -> 规范 ID
RULE_ALIASES: MappingProxyType[str, str] = MappingProxyType(
    {"heading-increment": "heading-hierarchy"}
)

_BY_ID = {rule.id: rule for rule in RULE_CATALOG}


def resolve_rule_id(rule_id: str) -> str:
    """将别名解析为规范规则 ID（未知 ID 原样返回）"""
    return RULE_ALIASES.get(rule_id, rule_id)


def is_known_rule(rule_id: str) -> bool:
    return resolve_rule_id(rule_id) in _BY_ID


def get_rule(rule_id: str) -> Rule:
    """按 ID 获取规则

    Raises:
        RuleNotFoundError: 规则不存在
    """
    rule = _BY_ID.get(resolve_rule_id(rule_id))
    if rule is None:
        raise RuleNotFoundError(rule_id, available=list(_BY_ID))
    return rule


def list_rules() -> list[Rule]:
    """可枚举的规则目录（供 `doclify rules` 等外部工具展示）"""
    return list(RULE_CATALOG)


def normalize_finding(
    rule_id: str,
    message: str,
    line: int | None = None,
    source: str | None = None,
    severity: Severity | None = None,
) -> Finding:
    """构造 Finding

    严重程度优先级：显式指定（自定义规则）> 目录默认值 > WARNING。
    """
    resolved = severity or RULE_SEVERITY.get(rule_id) or Severity.WARNING
    return Finding(code=rule_id, severity=resolved, message=message, line=line, source=source)
