"""Protocol definitions for content conversion."""

from typing import Protocol


class MarkdownConverter(Protocol):
    """
    Protocol for converting HTML to Markdown.

    Implementations convert annotated post HTML to Markdown. The pipeline
    only depends on this surface, so tests and callers can swap in their own.
    """

    def convert(self, html: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string

        Returns:
            Markdown string
        """
        ...
