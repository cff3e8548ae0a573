"""HTML to Markdown conversion."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from bs4 import BeautifulSoup, Comment, Doctype, Tag
from markdownify import ATX, UNDERSCORE, MarkdownConverter, abstract_inline_conversion

from .rules import DEFAULT_RULES, RuleSet

logger = logging.getLogger(__name__)

# class="language-js" on the <code> inside a fenced <pre>
CODE_LANGUAGE_CLASS = re.compile(r"language-(\S+)")


def code_language(pre: Tag) -> str:
    """Read the fence language from the class of a ``<pre>``'s ``<code>`` child."""
    code = pre.find("code")
    if code is None:
        return ""
    classes = code.get("class") or []
    if isinstance(classes, list):
        classes = " ".join(classes)
    match = CODE_LANGUAGE_CLASS.search(classes)
    return match.group(1) if match else ""


class RuleMarkdownConverter(MarkdownConverter):
    """
    markdownify converter that gives a rule set the first say on every element.

    A matching rule receives the element's already-converted inner Markdown and
    the element itself, and its return value replaces the element entirely.
    Elements no rule matches get markdownify's built-in handling.
    """

    def __init__(self, rules: RuleSet, **options: Any):
        super().__init__(**options)
        self._rules = rules

    # Emphasis uses underscores while strong keeps ``strong_em_symbol`` (**)
    convert_em = abstract_inline_conversion(lambda self: UNDERSCORE)
    convert_i = convert_em

    def process_tag(self, node: Tag, parent_tags: Optional[set[str]] = None) -> str:
        if parent_tags is None:
            parent_tags = set()

        if _is_paragraph_marker(node):
            # Blank <div> markers stand for paragraph breaks in block context only
            if "_inline" in parent_tags or "_noformat" in parent_tags:
                return ""
            return "\n\n"

        rule = self._rules.match(node)
        if rule is None:
            return super().process_tag(node, parent_tags=parent_tags)

        logger.debug(f"Rule '{rule.name}' matched <{node.name}>")
        return rule.replacement(self._inner_markdown(node, parent_tags), node)

    def _inner_markdown(self, node: Tag, parent_tags: set[str]) -> str:
        child_tags = set(parent_tags)
        child_tags.add(node.name)
        return "".join(
            self.process_element(child, parent_tags=child_tags)
            for child in node.children
            if not isinstance(child, (Comment, Doctype))
        )


def _is_paragraph_marker(node: Tag) -> bool:
    return node.name == "div" and not node.attrs and not node.get_text().strip() and node.find() is None


class HtmlToMarkdown:
    """
    Converts HTML content to Markdown using an ordered rule set.

    Uses markdownify with ATX headings, ``-`` bullets, ``_`` emphasis, pipe
    tables and fenced code blocks that take their language from a
    ``class="language-*"`` on the inner ``<code>``. The rule set is fixed at
    construction and shared read-only by every conversion, so one instance can
    serve concurrent callers.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert(html_string)
    """

    def __init__(
        self,
        rules: Optional[RuleSet] = None,
        heading_style: str = ATX,
        bullets: str = "-",
        escape_asterisks: bool = True,
        escape_underscores: bool = True,
    ):
        """
        Initialize the Markdown converter.

        Args:
            rules: Override rules (defaults to the embed/image/code rules)
            heading_style: markdownify heading style
            bullets: Bullet characters for nested unordered lists
            escape_asterisks: Escape ``*`` in text
            escape_underscores: Escape ``_`` in text
        """
        self._rules = rules if rules is not None else DEFAULT_RULES
        self._options: dict[str, Any] = {
            "heading_style": heading_style,
            "bullets": bullets,
            "escape_asterisks": escape_asterisks,
            "escape_underscores": escape_underscores,
            # Keep "<", ">" and "-" literal so the escaped more marker survives
            "escape_misc": False,
            "code_language_callback": code_language,
        }

    @property
    def rules(self) -> RuleSet:
        """Rules consulted before the built-in element handling."""
        return self._rules

    def convert(self, html: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string

        Returns:
            Markdown string

        Raises:
            Any error raised by the parser or a rule; there is no fallback output.
        """
        soup = BeautifulSoup(html, "html.parser")
        converter = RuleMarkdownConverter(self._rules, **self._options)
        return converter.convert_soup(soup)
