"""CheckRunner - 检查运行器"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING

from doclify.core.catalog import resolve_rule_id
from doclify.core.document import Document
from doclify.core.exceptions import FileReadError
from doclify.core.finding import LintResult
from doclify.engine import check_markdown
from doclify.quality import check_doc_freshness, compute_health_score

if TYPE_CHECKING:
    from doclify.config import Config
    from doclify.core.checker import CustomRule
    from doclify.core.finding import ContextLines, Finding

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    """单个文件的检查结果

    Attributes:
        path: 文件路径
        content: 文件内容（用于显示上下文）
        result: 检查结果
        strict: warning 是否视为不通过
    """

    path: Path
    content: str
    result: LintResult
    strict: bool = False

    _document: Document | None = field(default=None, init=False, repr=False)

    @property
    def health_score(self) -> int:
        summary = self.result.summary
        return compute_health_score(summary.errors, summary.warnings)

    @property
    def passed(self) -> bool:
        return self.result.passed(strict=self.strict)

    def get_context_lines(self, finding: Finding, context: int) -> ContextLines | None:
        """获取 Finding 所在行的上下文"""
        if finding.line is None:
            return None
        if self._document is None:
            self._document = Document(self.content)
        return self._document.get_context_lines(finding.line, before=context, after=context)


@dataclass
class CheckRunner:
    """检查运行器

    收集文件、逐个检查并交给报告器输出。

    Attributes:
        config: 配置对象
        root: 项目根目录
        today: 新鲜度检查使用的当前日期（默认今天）
    """

    config: Config
    root: Path
    today: date | None = None

    _custom_rules: list[CustomRule] = field(init=False, repr=False)
    _ignore: frozenset[str] = field(init=False, repr=False)

    def __post_init__(self):
        """解析根目录并加载自定义规则"""
        self.root = Path(self.root).resolve()
        self._custom_rules = self.config.load_custom_rules(self.root)
        self._ignore = frozenset(resolve_rule_id(rule_id) for rule_id in self.config.ignore_rules)

    def run(self, report: bool = True, paths: list[Path] | None = None) -> list[FileReport]:
        """运行检查

        Args:
            report: 是否输出报告
            paths: 要检查的文件或目录（None 则按 include / exclude 扫描根目录）

        Returns:
            每个文件的检查结果
        """
        files = self.collect_files(paths)
        logger.debug("Checking %d file(s) under %s", len(files), self.root)

        reports: list[FileReport] = []
        for file in files:
            try:
                reports.append(self.check_file(file))
            except FileReadError as e:
                logger.warning("Skipping %s: %s", file, e.reason)

        # 输出报告
        if report and self.config.reporter:
            self.config.reporter.report(reports, self.root)

        return reports

    def collect_files(self, paths: list[Path] | None = None) -> list[Path]:
        """收集要检查的文件

        Args:
            paths: 命令行给出的文件或目录（None 则扫描项目根目录）；
                目录按 include / exclude 展开，文件直接使用
        """
        if not paths:
            return self._glob(self.root)

        files: list[Path] = []
        for path in paths:
            path = Path(path).resolve()
            if path.is_dir():
                files.extend(self._glob(path))
            elif path.is_file():
                files.append(path)
            else:
                logger.warning("Path not found: %s", path)
        return sorted(set(files))

    def _glob(self, base: Path) -> list[Path]:
        files: list[Path] = []

        for pattern in self.config.include:
            for file in base.glob(pattern):
                if file.is_file() and not self._is_excluded(file, base):
                    files.append(file)

        return sorted(set(files))

    def _is_excluded(self, file: Path, base: Path) -> bool:
        """检查文件是否被排除"""
        try:
            rel_path = file.relative_to(base)
        except ValueError:
            return True

        rel_str = rel_path.as_posix()

        return any(fnmatch(rel_str, pattern) for pattern in self.config.exclude)

    def check_file(self, file: Path) -> FileReport:
        """检查单个文件

        Raises:
            FileReadError: 文件无法读取
        """
        try:
            content = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(file, str(e)) from e

        source = self._display_path(file)
        result = check_markdown(
            content,
            max_line_length=self.config.max_line_length,
            file_path=source,
            check_frontmatter=self.config.check_frontmatter,
            check_inline_html=self.config.check_inline_html,
            custom_rules=self._custom_rules,
        )

        if self.config.check_freshness:
            result.extend(
                check_doc_freshness(
                    content,
                    now=self.today,
                    max_age_days=self.config.freshness_days,
                    source=source,
                )
            )

        if self._ignore:
            result = LintResult(
                errors=[f for f in result.errors if f.code not in self._ignore],
                warnings=[f for f in result.warnings if f.code not in self._ignore],
            )

        return FileReport(path=file, content=content, result=result, strict=self.config.strict)

    def _display_path(self, file: Path) -> str:
        try:
            return file.relative_to(self.root).as_posix()
        except ValueError:
            return file.as_posix()


def run_checks(
    config: Config | None = None, root: Path | str | None = None, report: bool = True
) -> list[FileReport]:
    """便捷函数：运行检查

    Args:
        config: 配置对象（None 则加载默认配置）
        root: 项目根目录（None 则从配置确定）
        report: 是否输出报告

    Returns:
        每个文件的检查结果
    """
    from doclify.config import load_config

    if config is None:
        config, config_dir = load_config()
        if root is None:
            root = config.resolve_root(config_dir)

    root = Path.cwd() if root is None else Path(root) if isinstance(root, str) else root

    runner = CheckRunner(config=config, root=root)
    return runner.run(report=report)
