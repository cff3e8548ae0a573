"""Post content translation: preprocess, convert, clean up."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .conversion.frontmatter import get_post_authors
from .conversion.markdown import HtmlToMarkdown
from .conversion.protocols import MarkdownConverter
from .conversion.rules import RuleSet
from .models.config import TranslatorConfig
from .pipeline import (
    ConvertStep,
    FrontmatterStep,
    PostContext,
    PostprocessStep,
    PreprocessStep,
    TranslationPipeline,
)

logger = logging.getLogger(__name__)


def init_converter(rules: Optional[RuleSet] = None) -> HtmlToMarkdown:
    """
    Build the HTML to Markdown converter once for a whole run.

    Args:
        rules: Override rules (defaults to the embed/image/code rules)
    """
    return HtmlToMarkdown(rules=rules)


def build_pipeline(converter: MarkdownConverter, add_frontmatter: bool = False) -> TranslationPipeline:
    """Assemble the preprocess, convert and postprocess steps, plus frontmatter if asked."""
    pipeline = TranslationPipeline(
        steps=[
            PreprocessStep(),
            ConvertStep(converter),
            PostprocessStep(),
        ]
    )
    if add_frontmatter:
        pipeline.add_step(FrontmatterStep())
    return pipeline


def translate_content(
    content: str,
    config: Optional[TranslatorConfig] = None,
    converter: Optional[MarkdownConverter] = None,
) -> str:
    """
    Translate one post's HTML body to Markdown.

    Args:
        content: Post HTML (the export's ``encoded`` value)
        config: Translator options
        converter: Converter to reuse across posts (built on demand if None)

    Returns:
        Final Markdown string

    Raises:
        ConversionError: If any stage fails
    """
    config = config or TranslatorConfig()
    pipeline = build_pipeline(converter or init_converter())
    return pipeline.execute(PostContext(content=content, config=config)).markdown or ""


def get_post_content(
    post_data: Mapping[str, Any],
    converter: MarkdownConverter,
    config: TranslatorConfig,
) -> str:
    """Translate the first ``encoded`` value of a parsed feed item."""
    return translate_content(_first(post_data, "encoded") or "", config, converter)


def translate_post(
    post_data: Mapping[str, Any],
    config: Optional[TranslatorConfig] = None,
    converter: Optional[MarkdownConverter] = None,
) -> str:
    """
    Translate a parsed feed item, with frontmatter when ``add_frontmatter`` is set.

    ``post_data`` maps field names to lists of values, the shape an XML feed
    parser produces: ``{"title": ["Hello"], "encoded": ["<p>...</p>"], ...}``.
    """
    config = config or TranslatorConfig()
    ctx = PostContext(
        content=_first(post_data, "encoded") or "",
        config=config,
        title=_first(post_data, "title"),
        date=_first(post_data, "post_date"),
        authors=get_post_authors(post_data),
    )
    ctx = build_pipeline(converter or init_converter(), config.add_frontmatter).execute(ctx)
    logger.info(f"Translated post '{ctx.title or 'untitled'}'")
    return ctx.markdown or ""


def _first(post_data: Mapping[str, Any], key: str) -> Optional[str]:
    values = post_data.get(key)
    if not values:
        return None
    if isinstance(values, str):
        return values
    return values[0]
