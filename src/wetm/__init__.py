"""
wetm - Translate WordPress export post content to Markdown.

Usage:
    from wetm import TranslatorConfig, init_converter, translate_content

    converter = init_converter()
    config = TranslatorConfig(save_scraped_images=True)

    markdown = translate_content(post_html, config, converter)
"""

__version__ = "1.0.0"

from .conversion import (
    DEFAULT_RULES,
    FrontmatterBuilder,
    HtmlToMarkdown,
    Rule,
    RuleSet,
    clean_attribute,
    get_post_authors,
)
from .models.config import TranslatorConfig
from .pipeline import ConversionError
from .translator import get_post_content, init_converter, translate_content, translate_post

__all__ = [
    "__version__",
    # Translation
    "init_converter",
    "translate_content",
    "get_post_content",
    "translate_post",
    "ConversionError",
    # Config
    "TranslatorConfig",
    # Conversion
    "HtmlToMarkdown",
    "Rule",
    "RuleSet",
    "DEFAULT_RULES",
    "clean_attribute",
    "FrontmatterBuilder",
    "get_post_authors",
]
