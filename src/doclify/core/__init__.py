"""Core module - 核心组件"""

from doclify.core.catalog import (
    RULE_ALIASES,
    RULE_CATALOG,
    RULE_SEVERITY,
    Rule,
    get_rule,
    is_known_rule,
    list_rules,
    normalize_finding,
    resolve_rule_id,
)
from doclify.core.checker import CheckOptions, CustomRule, RuleEntry, RuleKind
from doclify.core.document import Document
from doclify.core.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigNotFoundError,
    ConfigValidationError,
    CustomRuleError,
    DoclifyError,
    FileError,
    FileReadError,
    FileWriteError,
    FixError,
    PatchApplyError,
    PatchError,
    PatchRevertError,
    RuleError,
    RuleNotFoundError,
)
from doclify.core.fences import FenceLine, FenceState, strip_fenced_blocks, strip_inline_code
from doclify.core.finding import ContextLines, Finding, LintResult, Severity, Summary
from doclify.core.suppression import SuppressionMap, build_suppression_map

__all__ = [
    "RULE_ALIASES",
    # Catalog
    "RULE_CATALOG",
    "RULE_SEVERITY",
    "CheckOptions",
    # Exceptions
    "ConfigError",
    "ConfigLoadError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "ContextLines",
    "CustomRule",
    "CustomRuleError",
    "DoclifyError",
    "Document",
    "FenceLine",
    "FenceState",
    "FileError",
    "FileReadError",
    "FileWriteError",
    # Finding
    "Finding",
    "FixError",
    "LintResult",
    "PatchApplyError",
    "PatchError",
    "PatchRevertError",
    "Rule",
    "RuleEntry",
    "RuleError",
    "RuleKind",
    "RuleNotFoundError",
    "Severity",
    "Summary",
    "SuppressionMap",
    "build_suppression_map",
    "get_rule",
    "is_known_rule",
    "list_rules",
    "normalize_finding",
    "resolve_rule_id",
    "strip_fenced_blocks",
    "strip_inline_code",
]
