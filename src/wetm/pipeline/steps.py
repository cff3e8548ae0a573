"""Pipeline steps for post content translation."""

import logging
from typing import Optional

from ..conversion.frontmatter import FrontmatterBuilder
from ..conversion.markdown import HtmlToMarkdown
from ..conversion.postprocess import postprocess
from ..conversion.preprocess import preprocess
from ..conversion.protocols import MarkdownConverter
from .base import PostContext

logger = logging.getLogger(__name__)


class PreprocessStep:
    """Applies the text-level HTML transforms to ``ctx.content``."""

    name = "preprocess"

    def execute(self, ctx: PostContext) -> PostContext:
        ctx.content = preprocess(ctx.content, ctx.config)
        return ctx


class ConvertStep:
    """
    Pipeline step that converts annotated HTML to Markdown.

    Reads from ctx.content, writes to ctx.markdown.

    Example:
        step = ConvertStep(HtmlToMarkdown())
        ctx = step.execute(ctx)
    """

    name = "convert"

    def __init__(self, converter: Optional[MarkdownConverter] = None):
        """
        Initialize the convert step.

        Args:
            converter: Markdown converter (uses default rules if None)
        """
        self._converter = converter or HtmlToMarkdown()

    def execute(self, ctx: PostContext) -> PostContext:
        ctx.markdown = self._converter.convert(ctx.content)
        logger.debug(f"Converted {len(ctx.content)} bytes of HTML to {len(ctx.markdown)} bytes of Markdown")
        return ctx


class PostprocessStep:
    """Normalizes the converted Markdown."""

    name = "postprocess"

    def execute(self, ctx: PostContext) -> PostContext:
        if ctx.markdown is None:
            raise ValueError("No Markdown to clean up; run the convert step first")
        ctx.markdown = postprocess(ctx.markdown)
        return ctx


class FrontmatterStep:
    """Prepends YAML frontmatter built from the post metadata."""

    name = "frontmatter"

    def __init__(self, builder: Optional[FrontmatterBuilder] = None):
        self._builder = builder or FrontmatterBuilder()

    def execute(self, ctx: PostContext) -> PostContext:
        if ctx.markdown is None:
            raise ValueError("No Markdown to add frontmatter to; run the convert step first")
        frontmatter = self._builder.build(title=ctx.title, date=ctx.date, authors=ctx.authors)
        ctx.markdown = frontmatter + ctx.markdown
        return ctx
