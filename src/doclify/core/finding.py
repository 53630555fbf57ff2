"""Finding - 检查结果模型定义"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """问题严重程度（只有 error / warning 两级）"""

    ERROR = "error"
    WARNING = "warning"

    def __str__(self) -> str:
        return self.value


@dataclass
class ContextLines:
    """上下文行信息"""

    before: list[tuple[int, str]]  # [(行号, 内容), ...]
    current: tuple[int, str]  # (行号, 内容)
    after: list[tuple[int, str]]  # [(行号, 内容), ...]


@dataclass(frozen=True)
class Finding:
    """表示检查发现的一个问题

    创建后不可变。行号始终指向原始内容的行（1-based）。
    """

    code: str  # 规则 ID
    severity: Severity
    message: str
    line: int | None = None  # 行号（1-based，可选）
    source: str | None = None  # 来源文件标识（可选）

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def location(self) -> str:
        """格式化的位置字符串"""
        source = self.source or "<input>"
        if self.line is not None:
            return f"{source}:{self.line}"
        return source

    def to_dict(self) -> dict[str, Any]:
        """转换为字典（省略空的 line / source）"""
        data: dict[str, Any] = {
            "code": self.code,
            "severity": str(self.severity),
            "message": self.message,
        }
        if self.line is not None:
            data["line"] = self.line
        if self.source is not None:
            data["source"] = self.source
        return data

    def __str__(self) -> str:
        return f"[{self.severity}] {self.location}: {self.message} ({self.code})"


@dataclass(frozen=True)
class Summary:
    """错误 / 警告计数"""

    errors: int = 0
    warnings: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"errors": self.errors, "warnings": self.warnings}


@dataclass
class LintResult:
    """单个文档的检查结果

    Attributes:
        errors: error 级别的问题（按规则执行顺序）
        warnings: warning 级别的问题（按规则执行顺序）
    """

    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)

    @property
    def summary(self) -> Summary:
        return Summary(errors=len(self.errors), warnings=len(self.warnings))

    @property
    def findings(self) -> list[Finding]:
        """所有问题（error 在前）"""
        return [*self.errors, *self.warnings]

    def add(self, finding: Finding) -> None:
        """按严重程度归入对应列表

        外部协作方（如死链检查器）通过此方法合并自己的结果。
        """
        if finding.is_error:
            self.errors.append(finding)
        else:
            self.warnings.append(finding)

    def extend(self, findings: list[Finding]) -> None:
        for finding in findings:
            self.add(finding)

    def passed(self, strict: bool = False) -> bool:
        """是否通过（strict 模式下 warning 也视为失败）"""
        if self.errors:
            return False
        return not (strict and self.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "errors": [f.to_dict() for f in self.errors],
            "warnings": [f.to_dict() for f in self.warnings],
            "summary": self.summary.to_dict(),
        }
