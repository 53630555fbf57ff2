"""Fixers module - 自动修复"""

from doclify.fixers.base import Change, FileFix, FixResult, FixSession, LinkChange, LinkFixResult
from doclify.fixers.formatting import auto_fix_formatting
from doclify.fixers.links import auto_fix_insecure_links, is_ambiguous_http_url
from doclify.fixers.patch import PatchFixer

__all__ = [
    "Change",
    "FileFix",
    "FixResult",
    "FixSession",
    "LinkChange",
    "LinkFixResult",
    "PatchFixer",
    "auto_fix_formatting",
    "auto_fix_insecure_links",
    "is_ambiguous_http_url",
]
