"""Config - 配置系统"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from doclify.core.catalog import is_known_rule
from doclify.core.exceptions import ConfigLoadError, ConfigNotFoundError, ConfigValidationError

if TYPE_CHECKING:
    from doclify.core.checker import CustomRule
    from doclify.reporters.base import Reporter

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "doclify_config.py"


@dataclass
class OutputConfig:
    """输出配置"""

    context_lines: int = 2
    color: str = "auto"  # auto | always | never
    format: str = "console"  # console | json


@dataclass
class FixConfig:
    """修复配置"""

    patch_dir: str = ".doclify/patches"
    dry_run: bool = False


@dataclass
class Config:
    """主配置类

    Attributes:
        root: 项目根目录（相对于配置文件位置）
        include: 要检查的文件 glob 模式
        exclude: 要排除的文件 glob 模式
        max_line_length: 行长度上限
        check_frontmatter: 是否要求 frontmatter
        check_inline_html: 是否检查行内 HTML
        custom_rules: 已编译的自定义规则
        custom_rules_file: 自定义规则 JSON 文件（相对于项目根目录）
        ignore_rules: 忽略的规则 ID
        strict: warning 也视为不通过
        check_freshness: 是否检查文档新鲜度
        freshness_days: 新鲜度上限（天）
        output: 输出配置
        fix: 修复配置
        reporter: 报告器
    """

    root: str | Path = "."
    include: list[str] = field(default_factory=lambda: ["**/*.md"])
    exclude: list[str] = field(default_factory=lambda: ["node_modules/**", ".git/**"])

    # 规则选项
    max_line_length: int = 160
    check_frontmatter: bool = False
    check_inline_html: bool = False
    custom_rules: list[CustomRule] = field(default_factory=list)
    custom_rules_file: str | Path | None = None
    ignore_rules: list[str] = field(default_factory=list)
    strict: bool = False

    check_freshness: bool = False
    freshness_days: int = 180

    # 子配置
    output: OutputConfig = field(default_factory=OutputConfig)
    fix: FixConfig = field(default_factory=FixConfig)

    reporter: Reporter | None = None

    def __post_init__(self):
        """初始化默认组件"""
        self.root = Path(self.root)

        # 默认报告器
        if self.reporter is None:
            self.reporter = self.build_reporter()

    def build_reporter(self) -> Reporter:
        """按输出配置创建报告器"""
        if self.output.format == "json":
            from doclify.reporters.json import JsonReporter

            return JsonReporter()

        from doclify.reporters.console import ColorMode, ConsoleReporter

        return ConsoleReporter(
            context_lines=self.output.context_lines,
            color=ColorMode(self.output.color),
        )

    def validate(self) -> None:
        """验证配置

        Raises:
            ConfigValidationError: 配置值无效
        """
        if not isinstance(self.max_line_length, int) or self.max_line_length <= 0:
            raise ConfigValidationError("max_line_length", self.max_line_length, "a positive integer")
        if not isinstance(self.freshness_days, int) or self.freshness_days < 0:
            raise ConfigValidationError("freshness_days", self.freshness_days, "a non-negative integer")
        for rule_id in self.ignore_rules:
            if not is_known_rule(rule_id):
                raise ConfigValidationError("ignore_rules", rule_id, "a known rule id")
        if self.output.color not in ("auto", "always", "never"):
            raise ConfigValidationError("output.color", self.output.color, "auto | always | never")
        if self.output.format not in ("console", "json"):
            raise ConfigValidationError("output.format", self.output.format, "console | json")

    def resolve_root(self, config_dir: Path) -> Path:
        """解析项目根目录的绝对路径

        Args:
            config_dir: 配置文件所在目录

        Returns:
            项目根目录的绝对路径
        """
        # __post_init__ 已将 root 转换为 Path
        root = self.root if isinstance(self.root, Path) else Path(self.root)
        if root.is_absolute():
            return root
        return (config_dir / root).resolve()

    def load_custom_rules(self, root: Path) -> list[CustomRule]:
        """合并 custom_rules 与 custom_rules_file 中的规则

        Raises:
            FileReadError: 规则文件无法读取
            CustomRuleError: 规则定义无效
        """
        rules = list(self.custom_rules)
        if self.custom_rules_file:
            from doclify.checkers.custom import load_custom_rules

            path = Path(self.custom_rules_file)
            if not path.is_absolute():
                path = root / path
            rules.extend(load_custom_rules(path))
        return rules


def load_config(config_path: Path | str | None = None) -> tuple[Config, Path]:
    """加载配置文件

    查找顺序：
    1. 指定的配置文件路径
    2. 当前目录的 doclify_config.py
    3. 向上递归查找 doclify_config.py

    Args:
        config_path: 配置文件路径（可选）

    Returns:
        (配置对象, 配置文件所在目录)

    Raises:
        ConfigNotFoundError: 指定的配置文件不存在
        ConfigLoadError: 配置文件加载失败
    """
    import importlib.util
    import sys

    # 查找配置文件
    if config_path:
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigNotFoundError([config_file])
    else:
        config_file = _find_config_file()
        if not config_file:
            # 没有找到配置文件，使用默认配置
            logger.debug("No %s found, using defaults", CONFIG_FILENAME)
            return Config(), Path.cwd()

    config_file = config_file.resolve()
    config_dir = config_file.parent

    # 动态导入配置模块
    spec = importlib.util.spec_from_file_location("doclify_config", config_file)
    if spec is None or spec.loader is None:
        raise ConfigLoadError(config_file, "cannot create module spec")

    module = importlib.util.module_from_spec(spec)
    sys.modules["doclify_config"] = module

    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigLoadError(config_file, str(e)) from e

    # 获取 config 对象
    if not hasattr(module, "config"):
        raise ConfigLoadError(config_file, "config file must define a 'config' variable")

    config = module.config
    if not isinstance(config, Config):
        raise ConfigLoadError(config_file, "'config' must be an instance of Config")

    logger.debug("Loaded config from %s", config_file)
    return config, config_dir


def _find_config_file() -> Path | None:
    """向上递归查找配置文件"""
    current = Path.cwd()

    while True:
        config_file = current / CONFIG_FILENAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:
            # 已到达根目录
            return None
        current = parent
