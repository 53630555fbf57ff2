"""Checker - 规则分派

内置规则与自定义规则共用同一个求值循环：每条规则是一个带类型标签的
RuleEntry，引擎按 kind 分派。
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from doclify.core.catalog import normalize_finding
from doclify.core.finding import Severity

if TYPE_CHECKING:
    from doclify.core.document import Document
    from doclify.core.finding import Finding


@dataclass(frozen=True)
class CheckOptions:
    """规则求值选项"""

    max_line_length: int = 160
    check_frontmatter: bool = False
    check_inline_html: bool = False


CheckFunc = Callable[["Document", CheckOptions], Iterable["Finding"]]


class RuleKind(Enum):
    """规则类型标签"""

    BUILTIN = "builtin"  # 由检查函数实现
    CUSTOM = "custom"  # 用户提供的正则


@dataclass(frozen=True)
class CustomRule:
    """用户自定义规则（正则在加载阶段已编译并验证）"""

    id: str
    severity: Severity
    pattern: re.Pattern[str]
    message: str


@dataclass(frozen=True)
class RuleEntry:
    """一条待求值的规则

    Attributes:
        kind: 规则类型
        id: 规则 ID
        check: BUILTIN 规则的检查函数
        custom: CUSTOM 规则的定义
    """

    kind: RuleKind
    id: str
    check: CheckFunc | None = None
    custom: CustomRule | None = None

    @classmethod
    def builtin(cls, rule_id: str, check: CheckFunc) -> RuleEntry:
        return cls(kind=RuleKind.BUILTIN, id=rule_id, check=check)

    @classmethod
    def from_custom(cls, rule: CustomRule) -> RuleEntry:
        return cls(kind=RuleKind.CUSTOM, id=rule.id, custom=rule)

    def evaluate(self, doc: Document, options: CheckOptions) -> list[Finding]:
        """对文档求值"""
        match self.kind:
            case RuleKind.BUILTIN:
                assert self.check is not None
                return list(self.check(doc, options))
            case RuleKind.CUSTOM:
                assert self.custom is not None
                return _match_custom(self.custom, doc)

    def __repr__(self) -> str:
        return f"RuleEntry(kind={self.kind.value!r}, id={self.id!r})"


def _match_custom(rule: CustomRule, doc: Document) -> list[Finding]:
    # re.search 每次从行首开始，行与行之间不会残留匹配位置
    return [
        normalize_finding(rule.id, rule.message, idx + 1, doc.source, rule.severity)
        for idx, line in enumerate(doc.clean_lines)
        if rule.pattern.search(line)
    ]
