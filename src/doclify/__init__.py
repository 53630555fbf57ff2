"""
doclify - Markdown 文档质量门禁

扫描 Markdown 文本，报告结构与风格问题，并能自动修复其中安全的一部分。
支持行内抑制指令、自定义正则规则、Python 配置和基于 patch 的修复撤销。
"""

from doclify.api import LintReport, fix, lint, score
from doclify.config import Config, FixConfig, OutputConfig
from doclify.core.catalog import RULE_CATALOG, list_rules
from doclify.core.checker import CustomRule
from doclify.core.exceptions import (
    ConfigError,
    CustomRuleError,
    DoclifyError,
    FileError,
    FixError,
    PatchError,
    RuleError,
)
from doclify.core.fences import strip_fenced_blocks
from doclify.core.finding import Finding, LintResult, Severity, Summary
from doclify.engine import check_markdown
from doclify.fixers import auto_fix_formatting, auto_fix_insecure_links
from doclify.runner import CheckRunner, run_checks

__all__ = [
    "RULE_CATALOG",
    # Runner
    "CheckRunner",
    # Config
    "Config",
    "ConfigError",
    "CustomRule",
    "CustomRuleError",
    # Exceptions
    "DoclifyError",
    "FileError",
    # Core
    "Finding",
    "FixConfig",
    "FixError",
    "LintReport",
    "LintResult",
    "OutputConfig",
    "PatchError",
    "RuleError",
    "Severity",
    "Summary",
    "auto_fix_formatting",
    "auto_fix_insecure_links",
    # Engine
    "check_markdown",
    # API
    "fix",
    "lint",
    "list_rules",
    "run_checks",
    "score",
    "strip_fenced_blocks",
]

__version__ = "0.1.0"
