"""自定义规则加载

规则文件为 JSON::

    {
        "rules": [
            {"id": "no-foo", "pattern": "foo", "message": "Avoid foo", "severity": "error"}
        ]
    }

正则在加载时编译并验证，引擎只接收合法的 CustomRule。
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from doclify.core.catalog import is_known_rule
from doclify.core.checker import CustomRule
from doclify.core.exceptions import CustomRuleError, FileReadError
from doclify.core.finding import Severity

logger = logging.getLogger(__name__)

# JS 风格的 flags 字符串 -> re 标志；g / u / y 对逐行匹配没有意义，直接忽略
FLAG_MAP: dict[str, int] = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL}
IGNORED_FLAGS = "guy"
DEFAULT_FLAGS = "gi"


def _compile_flags(flags: str, rule_id: str) -> int:
    result = 0
    for flag in flags:
        if flag in IGNORED_FLAGS:
            continue
        if flag not in FLAG_MAP:
            raise CustomRuleError(f'unsupported regex flag "{flag}"', rule_id=rule_id)
        result |= FLAG_MAP[flag]
    return result


def _require_str(raw: dict[str, Any], key: str, rule_id: str) -> str:
    value = raw.get(key)
    if not value or not isinstance(value, str):
        raise CustomRuleError(f'missing or invalid "{key}"', rule_id=rule_id)
    return value


def validate_custom_rule(raw: Any, index: int) -> CustomRule:
    """验证并编译一条自定义规则

    Raises:
        CustomRuleError: 规则定义无效
    """
    if not isinstance(raw, dict):
        raise CustomRuleError("rule must be an object", index=index)

    rule_id = raw.get("id")
    if not rule_id or not isinstance(rule_id, str):
        raise CustomRuleError('missing or invalid "id"', index=index)
    if is_known_rule(rule_id):
        raise CustomRuleError("id conflicts with a built-in rule", rule_id=rule_id)

    pattern = _require_str(raw, "pattern", rule_id)
    message = _require_str(raw, "message", rule_id)

    severity_name = raw.get("severity") or "warning"
    try:
        severity = Severity(severity_name)
    except ValueError:
        raise CustomRuleError('severity must be "error" or "warning"', rule_id=rule_id) from None

    flags = raw.get("flags")
    if flags is None:
        flags = DEFAULT_FLAGS
    if not isinstance(flags, str):
        raise CustomRuleError('invalid "flags"', rule_id=rule_id)

    try:
        compiled = re.compile(pattern, _compile_flags(flags, rule_id))
    except re.error as e:
        raise CustomRuleError(f"invalid regex pattern: {e}", rule_id=rule_id) from e

    return CustomRule(id=rule_id, severity=severity, pattern=compiled, message=message)


def load_custom_rules(path: Path | str) -> list[CustomRule]:
    """从 JSON 文件加载自定义规则

    Raises:
        FileReadError: 文件不存在或无法读取
        CustomRuleError: JSON 无效或规则定义无效
    """
    path = Path(path).resolve()
    if not path.exists():
        raise FileReadError(path, "rules file not found")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise FileReadError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise CustomRuleError(f"invalid JSON in rules file ({path}): {e}") from e

    if not isinstance(raw, dict) or not isinstance(raw.get("rules"), list):
        raise CustomRuleError('rules file must contain { "rules": [...] }')

    rules = [validate_custom_rule(rule, index) for index, rule in enumerate(raw["rules"])]
    logger.debug("Loaded %d custom rule(s) from %s", len(rules), path)
    return rules
