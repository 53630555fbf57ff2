"""Tests for custom rules - 自定义规则加载与验证

测试场景：
1. JSON 文件加载
2. flags 映射（默认不区分大小写）
3. 各种无效定义在加载阶段报错
"""

import json
import re
from pathlib import Path

import pytest

from doclify.checkers.custom import load_custom_rules, validate_custom_rule
from doclify.core.exceptions import CustomRuleError, FileReadError
from doclify.core.finding import Severity


def _write_rules(path: Path, rules) -> Path:
    path.write_text(json.dumps({"rules": rules}), encoding="utf-8")
    return path


class TestValidateCustomRule:
    """validate_custom_rule 测试"""

    def test_defaults(self) -> None:
        """测试默认 severity 与 flags"""
        rule = validate_custom_rule({"id": "no-foo", "pattern": "foo", "message": "No foo"}, 0)

        assert rule.id == "no-foo"
        assert rule.severity is Severity.WARNING
        assert rule.pattern.flags & re.IGNORECASE
        assert rule.pattern.search("FOO")

    def test_explicit_flags(self) -> None:
        """测试空 flags 区分大小写"""
        rule = validate_custom_rule(
            {"id": "no-foo", "pattern": "foo", "message": "No foo", "flags": "", "severity": "error"},
            0,
        )

        assert rule.severity is Severity.ERROR
        assert rule.pattern.search("FOO") is None
        assert rule.pattern.search("foo")

    def test_ignored_js_flags(self) -> None:
        """测试 g / u / y 被忽略"""
        rule = validate_custom_rule({"id": "r", "pattern": "a", "message": "m", "flags": "guy"}, 0)
        assert not rule.pattern.flags & re.IGNORECASE

    @pytest.mark.parametrize(
        ("raw", "fragment"),
        [
            ("not a dict", "index 3"),
            ({"pattern": "x", "message": "m"}, "index 3"),
            ({"id": "placeholder", "pattern": "x", "message": "m"}, "built-in"),
            ({"id": "r", "message": "m"}, '"pattern"'),
            ({"id": "r", "pattern": "x"}, '"message"'),
            ({"id": "r", "pattern": "x", "message": "m", "severity": "fatal"}, "severity"),
            ({"id": "r", "pattern": "x", "message": "m", "flags": 1}, "flags"),
            ({"id": "r", "pattern": "x", "message": "m", "flags": "x"}, 'flag "x"'),
            ({"id": "r", "pattern": "(", "message": "m"}, "invalid regex"),
        ],
    )
    def test_invalid(self, raw, fragment: str) -> None:
        """测试无效的规则定义"""
        with pytest.raises(CustomRuleError) as exc_info:
            validate_custom_rule(raw, 3)

        assert fragment in str(exc_info.value)


class TestLoadCustomRules:
    """load_custom_rules 测试"""

    def test_load(self, tmp_path: Path) -> None:
        """测试加载规则文件"""
        rules_file = _write_rules(
            tmp_path / "rules.json",
            [
                {"id": "no-foo", "pattern": "foo", "message": "No foo"},
                {"id": "no-bar", "pattern": "bar", "message": "No bar", "severity": "error"},
            ],
        )

        rules = load_custom_rules(rules_file)

        assert [rule.id for rule in rules] == ["no-foo", "no-bar"]
        assert rules[1].severity is Severity.ERROR

    def test_missing_file(self, tmp_path: Path) -> None:
        """测试文件不存在"""
        with pytest.raises(FileReadError):
            load_custom_rules(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """测试无效的 JSON"""
        rules_file = tmp_path / "rules.json"
        rules_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(CustomRuleError) as exc_info:
            load_custom_rules(rules_file)

        assert "invalid JSON" in str(exc_info.value)

    def test_missing_rules_key(self, tmp_path: Path) -> None:
        """测试缺少 rules 数组"""
        rules_file = tmp_path / "rules.json"
        rules_file.write_text('{"items": []}', encoding="utf-8")

        with pytest.raises(CustomRuleError):
            load_custom_rules(rules_file)
