"""Frontmatter helpers for translated posts."""

from collections.abc import Mapping
from typing import Any, Optional


def get_post_authors(post_data: Mapping[str, Any]) -> list[str]:
    """
    Return the post's author names from the feed item's ``creator`` values.

    Values are not decoded: WordPress doesn't allow unusual characters in
    usernames anyway. The first ``.`` in each name becomes a space, so
    ``jane.doe`` reads as ``jane doe``.
    """
    creators = post_data.get("creator")
    if not creators:
        return []
    return [creator.replace(".", " ", 1) for creator in creators]


class FrontmatterBuilder:
    """
    Builds YAML frontmatter for translated posts.

    Example:
        builder = FrontmatterBuilder()
        frontmatter = builder.build(
            title="Hello World",
            date="2020-01-01T12:00:00.000Z",
            authors=["jane doe"],
        )
    """

    def build(
        self,
        title: Optional[str] = None,
        date: Optional[str] = None,
        authors: Optional[list[str]] = None,
        **extra_fields: Any,
    ) -> str:
        """
        Build YAML frontmatter string.

        Args:
            title: Post title
            date: Publication date
            authors: Author names
            **extra_fields: Additional frontmatter fields

        Returns:
            YAML frontmatter string (with --- delimiters)
        """
        lines = ["---"]

        if title:
            lines.append(f'title: "{_escape(title)}"')

        if date:
            lines.append(f'date: "{_escape(date)}"')

        if authors:
            lines.append("authors:")
            for author in authors:
                lines.append(f'  - "{_escape(author)}"')

        for key, value in extra_fields.items():
            if value is not None:
                if isinstance(value, str):
                    lines.append(f'{key}: "{_escape(value)}"')
                elif isinstance(value, (list, tuple)):
                    lines.append(f"{key}:")
                    for item in value:
                        lines.append(f"  - {item}")
                else:
                    lines.append(f"{key}: {value}")

        lines.append("---")
        return "\n".join(lines) + "\n\n"


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')
