"""Pytest 配置和共享 fixtures"""

from collections.abc import Callable
from pathlib import Path

import pytest

from doclify import Config
from doclify.core.checker import CheckOptions
from doclify.core.document import Document
from doclify.core.finding import Finding
from doclify.reporters import ColorMode, ConsoleReporter

CLEAN_MARKDOWN = """# Title

Intro paragraph with a [link](https://example.com).

## Section

- item one
- item two

```python
print("hi")
```
"""


@pytest.fixture
def clean_markdown() -> str:
    """没有任何问题的文档"""
    return CLEAN_MARKDOWN


@pytest.fixture
def run_check() -> Callable[..., list[Finding]]:
    """对单个检查函数求值：run_check(check, content, **options)"""

    def run(check, content: str, **options) -> list[Finding]:
        return list(check(Document(content, source="doc.md"), CheckOptions(**options)))

    return run


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """创建临时项目目录结构"""
    (tmp_path / "docs").mkdir()
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)

    (tmp_path / "README.md").write_text(CLEAN_MARKDOWN, encoding="utf-8")
    (tmp_path / "docs" / "guide.md").write_text(
        "# Guide\n\nTODO: write this\n",
        encoding="utf-8",
    )
    (tmp_path / "docs" / "broken.md").write_text(
        "# One\n\n# Two\n",
        encoding="utf-8",
    )
    (tmp_path / "node_modules" / "pkg" / "README.md").write_text("#Ignored\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("# Not markdown\n", encoding="utf-8")

    return tmp_path


@pytest.fixture
def quiet_reporter() -> ConsoleReporter:
    """不带颜色的终端报告器"""
    return ConsoleReporter(context_lines=1, color=ColorMode.NEVER)


@pytest.fixture
def default_config(quiet_reporter: ConsoleReporter) -> Config:
    """默认配置"""
    return Config(
        root=".",
        include=["**/*.md"],
        reporter=quiet_reporter,
    )
