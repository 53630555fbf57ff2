"""Reporters module - 输出报告器"""

from doclify.reporters.base import Reporter
from doclify.reporters.console import ColorMode, ConsoleReporter
from doclify.reporters.json import JsonReporter

__all__ = [
    "ColorMode",
    "ConsoleReporter",
    "JsonReporter",
    "Reporter",
]
