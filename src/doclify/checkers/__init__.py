"""Checkers module - 内置规则实现

BUILTIN_RULES 决定规则的求值顺序，也就是同一严重程度下 Finding 的排列顺序。
"""

from doclify.checkers import content, headings, links, style, whitespace
from doclify.checkers.custom import load_custom_rules, validate_custom_rule
from doclify.core.checker import RuleEntry

BUILTIN_RULES: tuple[RuleEntry, ...] = (
    RuleEntry.builtin("frontmatter", content.check_frontmatter),
    RuleEntry.builtin("single-h1", headings.check_single_h1),
    RuleEntry.builtin("heading-hierarchy", headings.check_heading_hierarchy),
    RuleEntry.builtin("duplicate-heading", headings.check_duplicate_heading),
    RuleEntry.builtin("line-length", content.check_line_length),
    RuleEntry.builtin("placeholder", content.check_placeholders),
    RuleEntry.builtin("insecure-link", links.check_insecure_links),
    RuleEntry.builtin("empty-link", links.check_empty_links),
    RuleEntry.builtin("img-alt", links.check_image_alt),
    RuleEntry.builtin("no-trailing-spaces", whitespace.check_trailing_spaces),
    RuleEntry.builtin("no-multiple-blanks", whitespace.check_multiple_blanks),
    RuleEntry.builtin("single-trailing-newline", whitespace.check_trailing_newline),
    RuleEntry.builtin("no-missing-space-atx", headings.check_missing_space_atx),
    RuleEntry.builtin("heading-start-left", headings.check_heading_start_left),
    RuleEntry.builtin("no-trailing-punctuation-heading", headings.check_trailing_punctuation),
    RuleEntry.builtin("blanks-around-headings", headings.check_blanks_around_headings),
    RuleEntry.builtin("blanks-around-lists", whitespace.check_blanks_around_lists),
    RuleEntry.builtin("blanks-around-fences", whitespace.check_blanks_around_fences),
    RuleEntry.builtin("fenced-code-language", whitespace.check_fenced_code_language),
    RuleEntry.builtin("no-bare-urls", links.check_bare_urls),
    RuleEntry.builtin("no-reversed-links", links.check_reversed_links),
    RuleEntry.builtin("no-space-in-emphasis", style.check_space_in_emphasis),
    RuleEntry.builtin("no-space-in-links", links.check_space_in_links),
    RuleEntry.builtin("no-inline-html", content.check_inline_html),
    RuleEntry.builtin("no-empty-sections", headings.check_empty_sections),
    RuleEntry.builtin("no-duplicate-links", links.check_duplicate_links),
    RuleEntry.builtin("list-marker-consistency", style.check_list_marker_consistency),
    RuleEntry.builtin("link-title-style", style.check_link_title_style),
)

__all__ = [
    "BUILTIN_RULES",
    "load_custom_rules",
    "validate_custom_rule",
]
