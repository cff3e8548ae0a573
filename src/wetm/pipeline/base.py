"""Base classes for the content translation pipeline."""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from ..models.config import TranslatorConfig

logger = logging.getLogger(__name__)


class ConversionError(RuntimeError):
    """Raised when a pipeline step fails. The original exception is chained."""

    def __init__(self, step: str, message: str):
        super().__init__(f"{step}: {message}")
        self.step = step


@dataclass
class PostContext:
    """
    Context object passed through pipeline steps.

    Holds the state for translating a single post. Each step consumes the
    whole of ``content`` or ``markdown`` and replaces it; nothing is applied
    partially.

    Attributes:
        content: Post HTML (annotated in place by preprocessing)
        config: Translator options, read-only
        markdown: Converted Markdown, set by the convert step
        title: Post title, used for frontmatter
        date: Post date, used for frontmatter
        authors: Author names, used for frontmatter
    """

    content: str
    config: TranslatorConfig = field(default_factory=TranslatorConfig)

    markdown: Optional[str] = None

    # Metadata for frontmatter
    title: Optional[str] = None
    date: Optional[str] = None
    authors: list[str] = field(default_factory=list)


@runtime_checkable
class TranslationStep(Protocol):
    """
    Protocol for pipeline steps.

    Each step receives a PostContext, processes it, and returns the
    (possibly modified) context.

    Error Handling Contract:
    - Steps do not recover from failures; they raise
    - The pipeline wraps the failure in ConversionError and re-raises it

    Example implementation:
        class UppercaseStep:
            name = "uppercase"

            def execute(self, ctx: PostContext) -> PostContext:
                ctx.markdown = ctx.markdown.upper()
                return ctx
    """

    name: str

    def execute(self, ctx: PostContext) -> PostContext:
        """
        Execute this pipeline step.

        Args:
            ctx: The post context with accumulated state

        Returns:
            The (possibly modified) post context
        """
        ...


@dataclass
class TranslationPipeline:
    """
    Pipeline for translating a single post through multiple steps.

    Steps are executed in order. If a step raises, the pipeline logs the
    failure and raises ConversionError; the caller never sees partial
    Markdown.

    Example:
        pipeline = TranslationPipeline(steps=[
            PreprocessStep(),
            ConvertStep(converter),
            PostprocessStep(),
        ])

        ctx = pipeline.execute(PostContext(content=html, config=config))
        print(ctx.markdown)
    """

    steps: list[TranslationStep]

    def execute(self, ctx: PostContext) -> PostContext:
        """
        Execute the pipeline for a post.

        Args:
            ctx: Initial context holding the post HTML and config

        Returns:
            PostContext with ``markdown`` set

        Raises:
            ConversionError: If any step fails
        """
        for step in self.steps:
            started = time.perf_counter()
            try:
                ctx = step.execute(ctx)
            except Exception as e:
                logger.error(f"Step '{step.name}' failed: {e}")
                raise ConversionError(step.name, str(e)) from e
            logger.debug(f"Step '{step.name}' finished in {time.perf_counter() - started:.4f}s")

        return ctx

    def add_step(self, step: TranslationStep) -> "TranslationPipeline":
        """
        Add a step to the pipeline (fluent API).

        Args:
            step: The step to add

        Returns:
            Self for chaining
        """
        self.steps.append(step)
        return self
