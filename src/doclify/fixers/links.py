"""不安全链接自动升级：http:// -> https://"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

from doclify.core.fences import classify_fences
from doclify.core.patterns import MarkdownPatterns, trim_url
from doclify.fixers.base import LinkChange, LinkFixResult, sub_outside_code

logger = logging.getLogger(__name__)

# 本地 / 开发环境地址，升级协议可能改变运行时行为
AMBIGUOUS_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


def is_ambiguous_http_url(url: str) -> bool:
    """本地地址、非默认端口或无法解析的 URL"""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return True
    if not parts.hostname or parts.hostname in AMBIGUOUS_HOSTS:
        return True
    return port is not None and port != 80


def auto_fix_insecure_links(content: str) -> LinkFixResult:
    """把围栏代码与行内代码之外的 http:// 链接升级为 https://

    URL 末尾的 `),.;!?>` 不算 URL 的一部分。模糊地址不改写，记录在 ambiguous 中。
    """
    lines = content.split("\n")
    kinds = classify_fences(lines)
    changes: list[LinkChange] = []
    ambiguous: list[str] = []

    def upgrade(match: re.Match[str]) -> str | None:
        raw = match.group()
        url = trim_url(raw)
        if is_ambiguous_http_url(url):
            ambiguous.append(url)
            return None
        secure = "https://" + url[len("http://") :]
        changes.append(LinkChange(from_url=url, to_url=secure))
        return secure + raw[len(url) :]

    fixed = [
        line if kind.is_code else sub_outside_code(MarkdownPatterns.INSECURE_BARE, line, upgrade)[0]
        for line, kind in zip(lines, kinds)
    ]
    result = "\n".join(fixed)
    if ambiguous:
        logger.debug("Skipped %d ambiguous http:// URL(s)", len(ambiguous))
    return LinkFixResult(
        content=result,
        modified=result != content,
        changes=list(changes),
        ambiguous=ambiguous,
    )
