"""PatchFixer - 基于 Patch 文件的修复器"""

from __future__ import annotations

import difflib
import logging
import subprocess
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from doclify.core.exceptions import FileWriteError, PatchApplyError, PatchRevertError
from doclify.fixers.base import FileFix, FixSession

if TYPE_CHECKING:
    from doclify.fixers.base import FixResult

logger = logging.getLogger(__name__)


def _default_fix(content: str) -> FixResult:
    from doclify.api import fix

    return fix(content)


@dataclass
class PatchFixer:
    """基于 Patch 文件的修复器

    对每个文件应用自动修复，并生成 unified diff 格式的 patch 文件，支持：
    - 修复预览（dry-run，只返回 diff）
    - Patch 文件保存
    - 撤销修复（通过 git apply -R / patch -R）

    Attributes:
        patch_dir: Patch 文件存储目录（相对于项目根目录）
        context_lines: Diff 上下文行数
        fix_func: 内容修复函数
    """

    patch_dir: Path = field(default_factory=lambda: Path(".doclify/patches"))
    context_lines: int = 3
    fix_func: Callable[[str], FixResult] = field(default=_default_fix, repr=False)

    def fix(self, files: list[Path], root: Path, dry_run: bool = False) -> FixSession:
        """修复文件

        Args:
            files: 要修复的文件
            root: 项目根目录
            dry_run: 只生成 diff，不修改文件

        Returns:
            修复会话
        """
        session = FixSession()
        patches: list[str] = []
        fixed_contents: dict[Path, str] = {}

        for file in files:
            result, fixed, patch = self._fix_file(file, root)
            session.results.append(result)
            if patch:
                patches.append(patch)
                fixed_contents[file] = fixed

        session.patch = "".join(patches)

        if session.patch and not dry_run:
            session.patch_file = self._save_patch(session.patch, session.id, root)
            for file, content in fixed_contents.items():
                self._write_file(file, content)
            session.applied = True
            logger.info("Fixed %d file(s), patch saved to %s", len(fixed_contents), session.patch_file)

        session.complete()
        return session

    def _fix_file(self, file: Path, root: Path) -> tuple[FileFix, str, str | None]:
        """修复单个文件，返回 (记录, 修复后内容, diff)"""
        try:
            original = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", file, e)
            return FileFix(path=file, error=f"Failed to read file: {e}"), "", None

        result = self.fix_func(original)
        record = FileFix(path=file, changes=list(result.changes))
        if not result.modified:
            return record, original, None

        # 获取相对路径
        try:
            rel_path = file.relative_to(root)
        except ValueError:
            rel_path = file

        diff = difflib.unified_diff(
            original.splitlines(keepends=True),
            result.content.splitlines(keepends=True),
            fromfile=f"a/{rel_path.as_posix()}",
            tofile=f"b/{rel_path.as_posix()}",
            n=self.context_lines,
        )
        patch = "".join(_terminate_lines(diff))
        return record, result.content, patch

    def _write_file(self, file: Path, content: str) -> None:
        try:
            file.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileWriteError(file, str(e)) from e

    def _save_patch(self, patch: str, session_id: str, root: Path) -> Path:
        """保存 patch 文件"""
        patch_dir = root / self.patch_dir
        timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
        patch_file = patch_dir / f"{timestamp}_{session_id}.patch"
        try:
            patch_dir.mkdir(parents=True, exist_ok=True)
            patch_file.write_text(patch, encoding="utf-8")
        except OSError as e:
            raise PatchApplyError(patch_file, str(e)) from e
        return patch_file

    def undo(self, patch_file: Path, root: Path) -> bool:
        """撤销 patch

        Raises:
            PatchRevertError: patch 文件不存在
        """
        if not patch_file.exists():
            raise PatchRevertError(patch_file, "patch file not found")

        commands = (
            ["git", "apply", "-R", "--whitespace=nowarn", str(patch_file)],
            ["patch", "-R", "-p1", "-i", str(patch_file)],
        )
        for command in commands:
            try:
                result = subprocess.run(
                    command,
                    check=False,
                    cwd=root,
                    capture_output=True,
                    text=True,
                )
            except FileNotFoundError:
                logger.debug("%s not available", command[0])
                continue
            if result.returncode == 0:
                return True
            logger.debug("%s failed: %s", command[0], result.stderr.strip())
        return False

    def list_patches(self, root: Path) -> list[Path]:
        """列出所有 patch 文件（最新的在前）"""
        patch_dir = root / self.patch_dir
        if not patch_dir.exists():
            return []
        return sorted(patch_dir.glob("*.patch"), reverse=True)

    def get_latest_patch(self, root: Path) -> Path | None:
        """获取最新的 patch 文件"""
        patches = self.list_patches(root)
        return patches[0] if patches else None

    def preview_patch(self, patch_file: Path) -> str:
        """预览 patch 内容"""
        return patch_file.read_text(encoding="utf-8")


def _terminate_lines(diff_lines: Iterable[str]) -> Iterator[str]:
    # 缺少结尾换行的行需要补上 "\ No newline at end of file" 标记，否则 patch 无法解析
    for line in diff_lines:
        if line.endswith("\n"):
            yield line
        else:
            yield line + "\n"
            yield "\\ No newline at end of file\n"
