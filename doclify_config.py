"""
doclify 配置文件

放在项目根目录（或任一上级目录），`doclify check` 会自动向上查找。
"""

from doclify import Config, FixConfig, OutputConfig
from doclify.reporters import ConsoleReporter
from doclify.reporters.console import ColorMode, Theme

# =============================================================================
# 输出配置
# =============================================================================

# 终端报告器
console_reporter = ConsoleReporter(
    # 显示的上下文行数
    context_lines=2,
    # 颜色模式: auto, always, never
    color=ColorMode.AUTO,
    # 使用 Unicode 框线字符
    box_drawing=True,
    # 颜色主题：浅色背景的终端可改用 Theme.light()
    theme=Theme.default(),
)

# =============================================================================
# 主配置
# =============================================================================

config = Config(
    # 项目根目录（相对于配置文件）
    root=".",
    # 要检查的文件模式
    include=[
        "*.md",
        "docs/**/*.md",
    ],
    # 排除的文件模式
    exclude=[
        "**/node_modules/**",
        "**/.git/**",
        "CHANGELOG.md",
    ],
    # 规则选项
    max_line_length=160,
    check_frontmatter=False,
    check_inline_html=False,
    # 自定义规则文件: { "rules": [{"id": ..., "pattern": ..., "message": ...}] }
    custom_rules_file=None,
    # 忽略的规则
    ignore_rules=[],
    # warning 也视为失败
    strict=False,
    # 文档新鲜度（stale-doc）
    check_freshness=False,
    freshness_days=180,
    # 报告器
    reporter=console_reporter,
    # 输出配置
    output=OutputConfig(
        context_lines=2,
        color="auto",
    ),
    # 修复配置
    fix=FixConfig(
        patch_dir=".doclify/patches",
        dry_run=False,
    ),
)
