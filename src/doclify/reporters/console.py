"""ConsoleReporter - 终端彩色输出报告器"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from doclify.core.finding import Finding, Severity
from doclify.reporters.base import Reporter

if TYPE_CHECKING:
    from pathlib import Path

    from doclify.runner import FileReport


class ColorMode(Enum):
    """颜色模式"""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


@dataclass
class Theme:
    """颜色主题"""

    # 文件和位置
    file: str = "96"  # 青色
    line_num: str = "93"  # 黄色

    # 严重程度
    error: str = "91"  # 红色
    warning: str = "93"  # 黄色

    # 内容
    code: str = "95"  # 品红（规则 ID）
    success: str = "92"  # 绿色
    context: str = "90"  # 灰色（上下文）

    # 默认主题
    @classmethod
    def default(cls) -> Theme:
        return cls()

    @classmethod
    def light(cls) -> Theme:
        """浅色终端主题"""
        return cls(
            file="36",  # 深青
            line_num="33",  # 棕色
            error="31",  # 深红
            warning="33",  # 棕色
            code="35",
            success="32",
            context="37",  # 浅灰
        )


@dataclass
class ConsoleReporter(Reporter):
    """终端彩色输出报告器

    按文件分组输出，支持：
    - 彩色高亮
    - 上下文行显示
    - 严重程度图标和规则 ID
    - 带健康分的摘要

    Attributes:
        context_lines: 显示的上下文行数（0 表示只显示问题行）
        color: 颜色模式
        theme: 颜色主题
        box_drawing: 是否使用 Unicode 框线字符
    """

    name: str = "console"
    description: str = "Console reporter with color output"

    context_lines: int = 2
    color: ColorMode = ColorMode.AUTO
    theme: Theme = field(default_factory=Theme.default)
    box_drawing: bool = True

    # 框线字符
    _box_chars: dict = field(
        default_factory=lambda: {
            "top_left": "╭",
            "bottom_left": "╰",
            "vertical": "│",
            "horizontal": "─",
        },
        repr=False,
    )

    _simple_chars: dict = field(
        default_factory=lambda: {
            "top_left": "+",
            "bottom_left": "+",
            "vertical": "|",
            "horizontal": "-",
        },
        repr=False,
    )

    def __post_init__(self):
        """初始化颜色支持检测"""
        self._use_color = self._should_use_color()
        self._chars = self._box_chars if self.box_drawing else self._simple_chars

    def _should_use_color(self) -> bool:
        """判断是否应该使用颜色"""
        if self.color == ColorMode.ALWAYS:
            return True
        if self.color == ColorMode.NEVER:
            return False
        # AUTO: 检查是否为 TTY
        return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

    def _style(self, text: str, code: str) -> str:
        """应用 ANSI 样式"""
        if not self._use_color:
            return text
        return f"\033[{code}m{text}\033[0m"

    def _severity_color(self, severity: Severity) -> str:
        """获取严重程度对应的颜色代码"""
        match severity:
            case Severity.ERROR:
                return self.theme.error
            case Severity.WARNING:
                return self.theme.warning

    def _get_severity_icon(self, severity: Severity) -> str:
        """获取严重程度图标"""
        match severity:
            case Severity.ERROR:
                return "✗"
            case Severity.WARNING:
                return "⚠"

    def report(self, reports: list[FileReport], root: Path) -> None:
        """输出所有文件的问题"""
        with_findings = [r for r in reports if r.result.findings]
        if not with_findings:
            print(self._style(f"✓ No issues found ({len(reports)} file(s) checked)", self.theme.success))
            return

        for file_report in with_findings:
            self._report_file(file_report, root)

        # 输出摘要
        self.report_summary(reports)

    def _report_file(self, file_report: FileReport, root: Path) -> None:
        """输出单个文件的所有问题"""
        # 按行号排序，无行号的排在最后
        findings = sorted(
            file_report.result.findings,
            key=lambda f: (f.line is None, f.line or 0),
        )

        try:
            rel_path = file_report.path.relative_to(root)
        except ValueError:
            rel_path = file_report.path

        print()
        print(
            f"{self._chars['top_left']}{self._chars['horizontal']} "
            + self._style(rel_path.as_posix(), self.theme.file)
            + self._style(f" (score {file_report.health_score})", self.theme.context)
        )
        print(self._chars["vertical"])

        for finding in findings:
            self._print_finding_block(finding, file_report)

        print(self._chars["bottom_left"] + self._chars["horizontal"] * 2)

    def _print_finding_block(self, finding: Finding, file_report: FileReport) -> None:
        """打印问题块（含上下文）"""
        v = self._chars["vertical"]
        context = file_report.get_context_lines(finding, self.context_lines)

        if context is not None:
            for line_num, content in context.before:
                self._print_context_line(line_num, content)
            line_num, content = context.current
            print(f"{v}  {self._style(f'{line_num:>4}', self.theme.line_num)} {v} {content}")
            self._print_message(finding)
            for line_num, content in context.after:
                self._print_context_line(line_num, content)
        else:
            self._print_message(finding)

        print(v)

    def _print_context_line(self, line_num: int, content: str) -> None:
        """打印上下文行"""
        v = self._chars["vertical"]
        num_str = self._style(f"{line_num:>4}", self.theme.context)
        content_str = self._style(content, self.theme.context)
        print(f"{v}  {num_str} {v} {content_str}")

    def _print_message(self, finding: Finding) -> None:
        v = self._chars["vertical"]
        icon = self._get_severity_icon(finding.severity)
        msg = self._style(f"{icon} {finding.message}", self._severity_color(finding.severity))
        code = self._style(f"[{finding.code}]", self.theme.code)
        print(f"{v}       {v} {msg} {code}")

    def report_summary(self, reports: list[FileReport]) -> None:
        """输出摘要"""
        if not reports:
            return

        errors = sum(r.result.summary.errors for r in reports)
        warnings = sum(r.result.summary.warnings for r in reports)
        failed = sum(1 for r in reports if not r.passed)
        average = round(sum(r.health_score for r in reports) / len(reports))

        print()
        parts = []
        if errors:
            parts.append(self._style(f"{errors} error(s)", self.theme.error))
        if warnings:
            parts.append(self._style(f"{warnings} warning(s)", self.theme.warning))

        summary = ", ".join(parts) if parts else self._style("no issues", self.theme.success)
        print(f"Found {summary} in {len(reports)} file(s)")
        print(f"  Health score: {average}/100")
        if failed:
            print(self._style(f"  {failed} file(s) failed", self.theme.error))
