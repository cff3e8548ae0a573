"""Content conversion for wetm (preprocessing, HTML to Markdown, cleanup, frontmatter)."""

from .frontmatter import FrontmatterBuilder, get_post_authors
from .markdown import HtmlToMarkdown, RuleMarkdownConverter
from .postprocess import postprocess
from .preprocess import preprocess
from .protocols import MarkdownConverter
from .rules import DEFAULT_RULES, Rule, RuleSet, clean_attribute

__all__ = [
    # Protocols
    "MarkdownConverter",
    # Rules
    "Rule",
    "RuleSet",
    "DEFAULT_RULES",
    "clean_attribute",
    # Implementations
    "HtmlToMarkdown",
    "RuleMarkdownConverter",
    "FrontmatterBuilder",
    "get_post_authors",
    # Stages
    "preprocess",
    "postprocess",
]
