"""Suppression - 行内抑制指令解析

支持四种 HTML 注释指令（规则 ID 列表可省略，省略表示全部规则）::

    <!-- doclify-disable-next-line [rule-id ...] -->
    <!-- doclify-disable [rule-id ...] -->
    <!-- doclify-enable [rule-id ...] -->
    <!-- doclify-disable-file [rule-id ...] -->

指令只从剥离围栏后的视图中读取，代码块里的指令无效。
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from doclify.core.catalog import resolve_rule_id

if TYPE_CHECKING:
    from doclify.core.finding import Finding

WILDCARD = "*"

DISABLE_NEXT_LINE = re.compile(r"<!--\s*doclify-disable-next-line(?:\s+(.*?))?\s*-->")
DISABLE = re.compile(r"<!--\s*doclify-disable(?:\s+(.*?))?\s*-->")
ENABLE = re.compile(r"<!--\s*doclify-enable(?:\s+(.*?))?\s*-->")
DISABLE_FILE = re.compile(r"<!--\s*doclify-disable-file(?:\s+(.*?))?\s*-->")


def parse_rule_ids(raw: str | None) -> frozenset[str] | None:
    """解析指令参数

    Returns:
        规则 ID 集合；None 表示全部规则（参数为空或为 `*`）
    """
    if raw is None or not raw.strip():
        return None
    ids = raw.split()
    if WILDCARD in ids:
        return None
    return frozenset(resolve_rule_id(rule_id) for rule_id in ids)


@dataclass
class DisableState:
    """嵌套块禁用计数

    rule id（或 `*`）-> 嵌套深度。只在构建 SuppressionMap 时存在。
    """

    depth: dict[str, int] = field(default_factory=dict)

    def disable(self, rule_ids: frozenset[str] | None) -> None:
        for rule_id in rule_ids or (WILDCARD,):
            self.depth[rule_id] = self.depth.get(rule_id, 0) + 1

    def enable(self, rule_ids: frozenset[str] | None) -> None:
        # 重新启用全部规则总是清空所有嵌套的禁用
        if rule_ids is None:
            self.depth.clear()
            return
        for rule_id in rule_ids:
            count = self.depth.get(rule_id, 0)
            if count <= 1:
                self.depth.pop(rule_id, None)
            else:
                self.depth[rule_id] = count - 1

    @property
    def active(self) -> frozenset[str]:
        return frozenset(self.depth)


class SuppressionMap(Mapping[int, frozenset[str]]):
    """行号（1-based）-> 被抑制的规则 ID 集合（只读）"""

    def __init__(self, entries: Mapping[int, frozenset[str]] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    def __getitem__(self, line: int) -> frozenset[str]:
        return self._entries[line]

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def is_suppressed(self, finding: Finding) -> bool:
        """Finding 所在行是否抑制了该规则（或全部规则）"""
        if not finding.line:
            return False
        suppressed = self._entries.get(finding.line)
        if not suppressed:
            return False
        return WILDCARD in suppressed or finding.code in suppressed

    def __repr__(self) -> str:
        return f"SuppressionMap({dict(self._entries)!r})"


def build_suppression_map(lines: list[str]) -> SuppressionMap:
    """单次正向扫描构建抑制表

    Args:
        lines: 剥离围栏后的行
    """
    entries: dict[int, set[str]] = {}
    state = DisableState()

    def add(line_num: int, rule_ids: frozenset[str] | None) -> None:
        entries.setdefault(line_num, set()).update(rule_ids or (WILDCARD,))

    for idx, line in enumerate(lines):
        line_num = idx + 1

        next_line = DISABLE_NEXT_LINE.search(line)
        if next_line:
            add(line_num + 1, parse_rule_ids(next_line.group(1)))

        # disable-next-line 优先，不再当作块开始
        block_start = None if next_line else DISABLE.search(line)
        if block_start:
            state.disable(parse_rule_ids(block_start.group(1)))
            continue

        block_end = ENABLE.search(line)
        if block_end:
            state.enable(parse_rule_ids(block_end.group(1)))
            continue

        if state.depth:
            add(line_num, state.active)

    return SuppressionMap({line: frozenset(ids) for line, ids in entries.items()})


@dataclass(frozen=True)
class FileDirective:
    """整文件抑制指令

    Attributes:
        rule_ids: 被禁用的规则；None 表示禁用全部规则
    """

    rule_ids: frozenset[str] | None = None

    @property
    def disables_all(self) -> bool:
        return self.rule_ids is None

    def suppresses(self, finding: Finding) -> bool:
        return self.rule_ids is None or finding.code in self.rule_ids


def find_file_directive(content: str) -> FileDirective | None:
    """查找整文件抑制指令（content 应为剥离围栏后的内容）"""
    match = DISABLE_FILE.search(content)
    if match is None:
        return None
    return FileDirective(parse_rule_ids(match.group(1)))
