"""Fixer - 修复结果模型与共享工具"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from doclify.core.fences import mask_inline_code

if TYPE_CHECKING:
    import re
    from pathlib import Path


@dataclass(frozen=True)
class Change:
    """一次格式修复：满足的规则 ID 与所在行（1-based）"""

    rule: str
    line: int

    def to_dict(self) -> dict[str, Any]:
        return {"rule": self.rule, "line": self.line}


@dataclass(frozen=True)
class LinkChange:
    """一次 http:// -> https:// 升级

    Attributes:
        from_url: 原 URL
        to_url: 升级后的 URL
        rule: 合并进整体修复结果时标注的规则 ID
    """

    from_url: str
    to_url: str
    rule: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"from": self.from_url, "to": self.to_url}
        if self.rule is not None:
            data["rule"] = self.rule
        return data


@dataclass
class FixResult:
    """修复结果"""

    content: str
    modified: bool = False
    changes: list[Change | LinkChange] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "modified": self.modified,
            "changes": [c.to_dict() for c in self.changes],
        }


@dataclass
class LinkFixResult(FixResult):
    """链接升级结果，ambiguous 中的 URL 未被改写"""

    ambiguous: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "ambiguous": list(self.ambiguous)}


@dataclass
class FileFix:
    """单个文件的修复记录"""

    path: Path
    changes: list[Change | LinkChange] = field(default_factory=list)
    error: str | None = None

    @property
    def was_fixed(self) -> bool:
        return self.error is None and bool(self.changes)


@dataclass
class FixSession:
    """修复会话

    记录一次修复操作的所有信息，用于生成 patch 和撤销。
    """

    id: str = field(default_factory=lambda: uuid4().hex[:8])
    results: list[FileFix] = field(default_factory=list)
    patch: str = ""
    patch_file: Path | None = None
    applied: bool = False
    completed_at: datetime | None = None

    @property
    def fixed_files(self) -> list[FileFix]:
        return [r for r in self.results if r.was_fixed]

    @property
    def change_count(self) -> int:
        return sum(len(r.changes) for r in self.results)

    def complete(self):
        """标记会话完成"""
        self.completed_at = datetime.now()


def sub_outside_code(
    pattern: re.Pattern[str],
    line: str,
    replace: Callable[[re.Match[str]], str | None],
) -> tuple[str, int]:
    """在行内代码之外做正则替换

    在遮盖了行内代码的行上匹配，把替换结果写回原行。跨越代码片段的
    匹配被跳过；replace 返回 None 或原文时不算一次替换。

    Returns:
        (新行, 替换次数)
    """
    masked = mask_inline_code(line)
    parts: list[str] = []
    pos = 0
    count = 0
    for match in pattern.finditer(masked):
        start, end = match.span()
        if masked[start:end] != line[start:end]:
            continue
        new = replace(match)
        if new is None or new == match.group():
            continue
        parts.append(line[pos:start])
        parts.append(new)
        pos = end
        count += 1
    parts.append(line[pos:])
    return "".join(parts), count
