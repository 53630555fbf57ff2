"""Reporter - 报告器抽象基类"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from doclify.runner import FileReport


class Reporter(ABC):
    """报告器抽象基类

    负责将检查结果以特定格式输出。
    """

    name: str = "base"
    description: str = "Base reporter"

    @abstractmethod
    def report(self, reports: list[FileReport], root: Path) -> None:
        """输出检查结果

        Args:
            reports: 每个文件的检查结果
            root: 项目根目录
        """
        ...

    def report_summary(self, reports: list[FileReport]) -> None:  # noqa: B027
        """输出摘要信息

        Args:
            reports: 每个文件的检查结果
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
