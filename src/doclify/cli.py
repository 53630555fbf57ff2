"""CLI - 命令行接口"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from doclify import __version__
from doclify.core.exceptions import DoclifyError

if TYPE_CHECKING:
    from doclify.config import Config

# 退出码
EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def main(argv: list[str] | None = None) -> int:
    """主入口函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # 根据子命令执行
    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_OK

    try:
        return args.func(args)
    except DoclifyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE


def _load_config(args: argparse.Namespace) -> tuple[Config, Path]:
    """加载配置并合并命令行参数

    Raises:
        ConfigError: 配置文件无法加载或配置无效
    """
    from doclify.config import load_config

    config, config_dir = load_config(args.config)

    if getattr(args, "include", None):
        config.include.extend(args.include)
    if getattr(args, "exclude", None):
        config.exclude.extend(args.exclude)
    if getattr(args, "max_line_length", None) is not None:
        config.max_line_length = args.max_line_length
    if getattr(args, "strict", False):
        config.strict = True
    if getattr(args, "check_frontmatter", False):
        config.check_frontmatter = True
    if getattr(args, "check_inline_html", False):
        config.check_inline_html = True
    if getattr(args, "check_freshness", False):
        config.check_freshness = True
    if getattr(args, "freshness_days", None) is not None:
        config.freshness_days = args.freshness_days
    if getattr(args, "rules", None):
        config.custom_rules_file = args.rules.resolve()
    if getattr(args, "ignore_rules", None):
        for value in args.ignore_rules:
            config.ignore_rules.extend(r.strip() for r in value.split(",") if r.strip())

    config.validate()
    return config, config_dir


def create_parser() -> argparse.ArgumentParser:
    """创建命令行解析器"""
    parser = argparse.ArgumentParser(
        prog="doclify",
        description="Markdown quality gate: lint documents and auto-fix safe formatting issues",
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", "-c", type=Path, help="Path to config file (doclify_config.py)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check 命令
    check_parser = subparsers.add_parser("check", help="Lint Markdown files")
    check_parser.add_argument("paths", nargs="*", type=Path, help="Files or directories to check")
    check_parser.add_argument(
        "--include", "-I", action="append", default=[], help="Additional glob patterns to include"
    )
    check_parser.add_argument(
        "--exclude", "-E", action="append", default=[], help="Additional glob patterns to exclude"
    )
    check_parser.add_argument("--max-line-length", type=int, help="Maximum line length")
    check_parser.add_argument("--strict", action="store_true", help="Treat warnings as failures")
    check_parser.add_argument(
        "--check-frontmatter", action="store_true", help="Require a YAML frontmatter block"
    )
    check_parser.add_argument(
        "--check-inline-html", action="store_true", help="Report inline HTML tags"
    )
    check_parser.add_argument(
        "--check-freshness", action="store_true", help="Warn on documents without a recent update date"
    )
    check_parser.add_argument("--freshness-days", type=int, help="Maximum document age in days")
    check_parser.add_argument("--rules", type=Path, help="Custom rules JSON file")
    check_parser.add_argument(
        "--ignore-rules", action="append", default=[], help="Comma-separated rule ids to ignore"
    )
    check_parser.add_argument("--json", action="store_true", help="Output in JSON format")
    check_parser.add_argument("--quiet", "-q", action="store_true", help="Only show summary")
    check_parser.set_defaults(func=cmd_check)

    # fix 命令
    fix_parser = subparsers.add_parser("fix", help="Auto-fix insecure links and formatting")
    fix_parser.add_argument("paths", nargs="*", type=Path, help="Files or directories to fix")
    fix_parser.add_argument(
        "--dry-run", action="store_true", help="Preview changes without applying"
    )
    fix_parser.set_defaults(func=cmd_fix)

    # undo 命令
    undo_parser = subparsers.add_parser("undo", help="Undo a patch")
    undo_parser.add_argument(
        "patch", nargs="?", type=Path, help="Patch file to undo (default: latest)"
    )
    undo_parser.add_argument(
        "--list", "-l", action="store_true", dest="list_patches", help="List all patches"
    )
    undo_parser.add_argument(
        "--show", "-s", action="store_true", help="Print the patch instead of reverting it"
    )
    undo_parser.set_defaults(func=cmd_undo)

    # rules 命令
    rules_parser = subparsers.add_parser("rules", help="List built-in rules")
    rules_parser.add_argument("rule_id", nargs="?", help="Show a single rule (aliases accepted)")
    rules_parser.add_argument("--json", action="store_true", help="Output in JSON format")
    rules_parser.set_defaults(func=cmd_rules)

    return parser


def cmd_check(args: argparse.Namespace) -> int:
    """执行 check 命令"""
    from doclify.reporters.json import JsonReporter
    from doclify.runner import CheckRunner

    config, config_dir = _load_config(args)
    if args.json:
        config.reporter = JsonReporter()

    root = config.resolve_root(config_dir)
    runner = CheckRunner(config=config, root=root)
    reports = runner.run(report=not args.quiet, paths=args.paths or None)

    if args.quiet:
        _output_summary(reports)

    # 返回码：任一文件未通过返回 1
    return EXIT_OK if all(r.passed for r in reports) else EXIT_FAILED


def cmd_fix(args: argparse.Namespace) -> int:
    """执行 fix 命令"""
    from doclify.fixers.patch import PatchFixer
    from doclify.runner import CheckRunner

    config, config_dir = _load_config(args)
    root = config.resolve_root(config_dir)
    files = CheckRunner(config=config, root=root).collect_files(args.paths or None)

    fixer = PatchFixer(patch_dir=Path(config.fix.patch_dir))
    dry_run = args.dry_run or config.fix.dry_run
    session = fixer.fix(files, root, dry_run=dry_run)

    if not session.patch:
        print("✓ Nothing to fix")
        return EXIT_OK

    if dry_run:
        print(session.patch, end="")
        print(f"\n{len(session.fixed_files)} file(s) would be fixed ({session.change_count} change(s))")
        return EXIT_OK

    print(f"✓ Fixed {len(session.fixed_files)} file(s) ({session.change_count} change(s))")
    if session.patch_file is not None:
        print(f"  Patch saved: {_relative(session.patch_file, root)}")
    return EXIT_OK


def cmd_undo(args: argparse.Namespace) -> int:
    """执行 undo 命令"""
    from doclify.fixers.patch import PatchFixer

    config, config_dir = _load_config(args)

    root = config.resolve_root(config_dir)
    fixer = PatchFixer(patch_dir=Path(config.fix.patch_dir))

    # 列出 patches
    if args.list_patches:
        patches = fixer.list_patches(root)
        if not patches:
            print("No patches found")
            return EXIT_OK

        print("Available patches:")
        for patch in patches:
            print(f"  {_relative(patch, root)}")
        return EXIT_OK

    # 撤销 patch
    if args.patch:
        patch_file = Path(args.patch)
        if not patch_file.is_absolute():
            patch_file = root / patch_file
    else:
        patch_file = fixer.get_latest_patch(root)
        if not patch_file:
            print("No patches to undo", file=sys.stderr)
            return EXIT_FAILED

    if not patch_file.exists():
        print(f"Patch file not found: {patch_file}", file=sys.stderr)
        return EXIT_FAILED

    if args.show:
        print(fixer.preview_patch(patch_file), end="")
        return EXIT_OK

    print(f"Undoing patch: {patch_file.name}")
    if fixer.undo(patch_file, root):
        patch_file.unlink()
        print("✓ Patch reverted successfully")
        return EXIT_OK

    print("✗ Failed to revert patch", file=sys.stderr)
    return EXIT_FAILED


def cmd_rules(args: argparse.Namespace) -> int:
    """执行 rules 命令"""
    from doclify.core.catalog import RULE_ALIASES, get_rule, list_rules

    rules = [get_rule(args.rule_id)] if args.rule_id else list_rules()
    if args.json:
        print(json.dumps([rule.to_dict() for rule in rules], indent=2))
        return EXIT_OK

    width = max(len(rule.id) for rule in rules)
    for rule in rules:
        print(f"  {rule.id:<{width}}  {str(rule.severity):<7}  {rule.description}")
    if RULE_ALIASES and not args.rule_id:
        print()
        for alias, target in RULE_ALIASES.items():
            print(f"  {alias} -> {target}")
    return EXIT_OK


def _relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _output_summary(reports: list) -> None:
    """输出摘要"""
    errors = sum(r.result.summary.errors for r in reports)
    warnings = sum(r.result.summary.warnings for r in reports)
    failed = sum(1 for r in reports if not r.passed)

    if not errors and not warnings:
        print(f"✓ No issues found ({len(reports)} file(s) checked)")
        return

    print(f"Found {errors} error(s), {warnings} warning(s) in {len(reports)} file(s); {failed} failed")


if __name__ == "__main__":
    sys.exit(main())
