"""Exceptions - 自定义异常类

检查核心（规则引擎、抑制解析、自动修复）对任何 Markdown 输入都不抛异常，
以下异常只来自配置加载、自定义规则加载和文件读写。
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class DoclifyError(Exception):
    """doclify 基础异常类"""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class ConfigError(DoclifyError):
    """配置相关错误"""


class ConfigNotFoundError(ConfigError):
    """配置文件未找到"""

    def __init__(self, search_paths: list[Path] | None = None) -> None:
        message = "Configuration file not found"
        super().__init__(message, search_paths=search_paths)
        self.search_paths = search_paths


class ConfigLoadError(ConfigError):
    """配置文件加载失败"""

    def __init__(self, path: Path, reason: str) -> None:
        message = f"Failed to load config file: {reason}"
        super().__init__(message, path=path, reason=reason)
        self.path = path
        self.reason = reason


class ConfigValidationError(ConfigError):
    """配置验证失败"""

    def __init__(self, field: str, value: Any, expected: str) -> None:
        message = f"Invalid config value for '{field}': expected {expected}, got {value!r}"
        super().__init__(message, field=field, value=value, expected=expected)
        self.field = field
        self.value = value
        self.expected = expected


class RuleError(DoclifyError):
    """规则相关错误"""


class RuleNotFoundError(RuleError):
    """规则 ID 不存在"""

    def __init__(self, rule_id: str, available: list[str] | None = None) -> None:
        self.suggestions = get_close_matches(rule_id, available or [], n=3, cutoff=0.6)
        message = f"Unknown rule: {rule_id}"
        if self.suggestions:
            message += f". Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message, rule_id=rule_id)
        self.rule_id = rule_id


class CustomRuleError(RuleError):
    """自定义规则定义无效（在加载阶段发现）"""

    def __init__(self, reason: str, rule_id: str | None = None, index: int | None = None) -> None:
        if rule_id is not None:
            message = f'Rule "{rule_id}": {reason}'
        elif index is not None:
            message = f"Rule at index {index}: {reason}"
        else:
            message = reason
        super().__init__(message)
        self.reason = reason
        self.rule_id = rule_id
        self.index = index


class FileError(DoclifyError):
    """文件操作相关错误"""


class FileReadError(FileError):
    """文件读取失败"""

    def __init__(self, path: Path, reason: str) -> None:
        message = f"Failed to read file: {reason}"
        super().__init__(message, path=path, reason=reason)
        self.path = path
        self.reason = reason


class FileWriteError(FileError):
    """文件写入失败"""

    def __init__(self, path: Path, reason: str) -> None:
        message = f"Failed to write file: {reason}"
        super().__init__(message, path=path, reason=reason)
        self.path = path
        self.reason = reason


class FixError(DoclifyError):
    """修复相关错误"""


class PatchError(FixError):
    """Patch 操作失败"""

    def __init__(self, path: Path, reason: str) -> None:
        message = f"Patch operation failed: {reason}"
        super().__init__(message, path=path, reason=reason)
        self.path = path
        self.reason = reason


class PatchApplyError(PatchError):
    """Patch 保存失败"""


class PatchRevertError(PatchError):
    """Patch 撤销失败"""
