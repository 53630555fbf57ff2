"""Quality - 健康分与文档新鲜度"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone

import yaml

from doclify.core.catalog import normalize_finding
from doclify.core.document import find_frontmatter_end
from doclify.core.finding import Finding

logger = logging.getLogger(__name__)

DEFAULT_FRESHNESS_DAYS = 180
ERROR_PENALTY = 25
WARNING_PENALTY = 8

# frontmatter 中表示最后更新日期的键（不区分大小写）
FRESHNESS_KEYS = ("updated", "last_updated", "lastmodified", "date")

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
INLINE_LAST_UPDATED = re.compile(r"last\s*updated\s*:\s*(\d{4}-\d{2}-\d{2})", re.IGNORECASE)


def compute_health_score(errors: int = 0, warnings: int = 0) -> int:
    """0-100 的健康分：每个 error 扣 25 分，每个 warning 扣 8 分"""
    raw = 100 - errors * ERROR_PENALTY - warnings * WARNING_PENALTY
    return max(0, min(100, round(raw)))


@dataclass(frozen=True)
class FreshnessDate:
    """找到的更新日期及其位置"""

    date: date
    key: str
    line: int


def _parse_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    cleaned = value.strip().strip("'\"")
    if not ISO_DATE.match(cleaned):
        return None
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        return None


def _frontmatter_date(lines: list[str]) -> FreshnessDate | None:
    end = find_frontmatter_end(lines)
    if end is None:
        return None

    try:
        data = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError as e:
        logger.debug("Failed to parse YAML frontmatter: %s", e)
        return None
    if not isinstance(data, dict):
        return None

    for key, value in data.items():
        if str(key).lower() not in FRESHNESS_KEYS:
            continue
        parsed = _parse_date(value)
        if parsed is None:
            continue
        key_line = re.compile(rf"^\s*{re.escape(str(key))}\s*:")
        line = next((idx + 1 for idx in range(1, end) if key_line.match(lines[idx])), 1)
        return FreshnessDate(date=parsed, key=str(key), line=line)
    return None


def find_freshness_date(content: str) -> FreshnessDate | None:
    """frontmatter 中的日期优先，其次是正文中的 `Last updated: YYYY-MM-DD`"""
    lines = content.split("\n")
    found = _frontmatter_date(lines)
    if found is not None:
        return found

    for idx, line in enumerate(lines):
        match = INLINE_LAST_UPDATED.search(line)
        if match is None:
            continue
        parsed = _parse_date(match.group(1))
        if parsed is not None:
            return FreshnessDate(date=parsed, key="last-updated", line=idx + 1)
    return None


def check_doc_freshness(
    content: str,
    *,
    now: datetime | date | None = None,
    max_age_days: int = DEFAULT_FRESHNESS_DAYS,
    source: str | None = None,
) -> list[Finding]:
    """文档新鲜度检查（stale-doc）

    Args:
        content: 文档内容
        now: 当前时间（默认 UTC 今天）
        max_age_days: 允许的最大天数
        source: 来源文件标识
    """
    if now is None:
        now = datetime.now(timezone.utc)
    today = now.date() if isinstance(now, datetime) else now

    found = find_freshness_date(content)
    if found is None:
        return [
            normalize_finding(
                "stale-doc",
                f"No freshness date found. Add frontmatter `updated: YYYY-MM-DD` (max {max_age_days} days).",
                1,
                source,
            )
        ]

    age_days = (today - found.date).days
    if age_days > max_age_days:
        return [
            normalize_finding(
                "stale-doc",
                f"Document appears stale: {age_days} days old (max {max_age_days}).",
                found.line,
                source,
            )
        ]
    return []
