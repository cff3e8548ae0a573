"""Conversion rules that override the generic HTML to Markdown handling.

Each rule pairs a node filter with a replacement function. The engine asks the
rules in registration order and the first matching rule produces the Markdown
for that node; everything else falls through to markdownify's built-in
element handling.

Embeds (tweets, codepens, scripts, iframes) are not translated. Their markup
is emitted verbatim so the static site can render them as raw HTML.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Callable, Optional, Union

from bs4 import Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

# Injected by the preprocessor on <pre> tags that follow a WordPress code block comment
LANGUAGE_ATTRIBUTE = "data-wetm-language"

NodeFilter = Callable[[Tag], bool]
Replacement = Callable[[str, Tag], str]

_ATTRIBUTE_NEWLINES = re.compile(r"(\n+\s*)+")


def clean_attribute(value: Optional[str]) -> str:
    """
    Normalize an attribute value for use inside a single-line custom tag.

    Runs of newlines (and the whitespace trailing them) collapse to one
    newline. Missing values become an empty string.
    """
    if not value:
        return ""
    return _ATTRIBUTE_NEWLINES.sub("\n", value)


def get_attribute(node: Tag, name: str) -> Optional[str]:
    """Return an attribute as a plain string, joining multi-valued ones like ``class``."""
    value: Union[str, list[str], None] = node.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value


class SourceOrderFormatter(HTMLFormatter):
    """Minimal-escaping HTML formatter that keeps attributes in source order."""

    def __init__(self) -> None:
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml)

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return tag.attrs.items()


_SOURCE_ORDER = SourceOrderFormatter()


def outer_html(node: Tag) -> str:
    """Serialize ``node`` with its attributes in the order they were written."""
    return node.decode(formatter=_SOURCE_ORDER)


@dataclass(frozen=True)
class Rule:
    """
    A named override for one kind of node.

    Attributes:
        name: Identifier used in logs and for lookups
        filter: Returns True when this rule should render the node
        replacement: Builds the output from the converted inner content and the node
    """

    name: str
    filter: NodeFilter
    replacement: Replacement


class RuleSet:
    """
    Immutable, ordered collection of rules.

    Rules are evaluated in registration order and the first match wins, so
    more specific rules must be registered before more general ones.

    Example:
        rules = RuleSet([tweet_rule, image_rule])
        rule = rules.match(node)
        if rule is not None:
            markdown = rule.replacement(content, node)
    """

    def __init__(self, rules: Iterable[Rule]):
        self._rules: tuple[Rule, ...] = tuple(rules)
        names = [rule.name for rule in self._rules]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rule names: {', '.join(duplicates)}")

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def names(self) -> list[str]:
        """Rule names in evaluation order."""
        return [rule.name for rule in self._rules]

    def get(self, name: str) -> Optional[Rule]:
        """Look up a rule by name."""
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def match(self, node: Tag) -> Optional[Rule]:
        """Return the first rule whose filter accepts ``node``, or None."""
        for rule in self._rules:
            if rule.filter(node):
                return rule
        return None


def _image_tag(src: str, alt: str, title: str, caption: Optional[str] = None, compact: bool = False) -> str:
    """
    Render the custom ``<Image />`` tag.

    In compact form, empty alt and title attributes are left out.
    """
    parts = [f'<Image filename="{src}"']
    if alt or not compact:
        parts.append(f'alt="{alt}"')
    if title or not compact:
        parts.append(f'title="{title}"')
    if caption is not None:
        parts.append(f'caption="{caption}"')
    return " ".join(parts) + " />"


# tweet


def _is_tweet(node: Tag) -> bool:
    return node.name == "blockquote" and get_attribute(node, "class") == "twitter-tweet"


def _replace_embed(content: str, node: Tag) -> str:
    # No trailing break, so a following <script> can sit directly under the embed
    return "\n\n" + outer_html(node)


# codepen


def _is_codepen(node: Tag) -> bool:
    # Codepen embed snippets have changed over the years; these checks cover all of them
    return (
        node.name in ("p", "div")
        and node.has_attr("data-slug-hash")
        and get_attribute(node, "class") == "codepen"
    )


# script


def _is_script(node: Tag) -> bool:
    return node.name == "script"


def _replace_script(content: str, node: Tag) -> str:
    before = "\n\n"
    if isinstance(node.previous_sibling, Tag):
        # keep twitter and codepen <script> tags snug with the element above them
        before = "\n"
    html = outer_html(node).replace('async=""', "async", 1)
    return before + html + "\n\n"


# iframe


def _is_iframe(node: Tag) -> bool:
    return node.name == "iframe"


def _replace_iframe(content: str, node: Tag) -> str:
    # boolean attributes do not need to be set to an empty string
    html = (
        outer_html(node)
        .replace('allowfullscreen=""', "allowFullScreen", 1)
        .replace('allowpaymentrequest=""', "allowPaymentRequest", 1)
        .replace(' frameborder="0"', "", 1)
        .replace(' scrolling="no"', "", 1)
    )
    return "\n\n" + html + "\n\n"


# figure


def _is_figure(node: Tag) -> bool:
    return node.name == "figure"


def _replace_figure(content: str, node: Tag) -> str:
    img = node.find("img")
    if img is None:
        return ""

    src = get_attribute(img, "src") or ""
    if not src:
        return ""

    figcaption = node.find("figcaption")
    caption = clean_attribute(figcaption.get_text()) if figcaption is not None else None
    return _image_tag(
        src,
        clean_attribute(get_attribute(img, "alt")),
        clean_attribute(get_attribute(img, "title")),
        caption=caption,
        compact=True,
    )


# pre


def _is_bare_pre(node: Tag) -> bool:
    # a <pre> with <code> inside already renders as a fenced block
    return node.name == "pre" and node.find("code") is None


def _replace_pre(content: str, node: Tag) -> str:
    language = get_attribute(node, LANGUAGE_ATTRIBUTE) or ""
    return "\n\n```" + language + "\n" + node.get_text() + "\n```\n\n"


# image


def _is_image(node: Tag) -> bool:
    return node.name == "img"


def _replace_image(content: str, node: Tag) -> str:
    src = get_attribute(node, "src") or ""
    if not src:
        return ""
    return _image_tag(
        src,
        clean_attribute(get_attribute(node, "alt")),
        clean_attribute(get_attribute(node, "title")),
    )


TWEET_RULE = Rule("tweet", _is_tweet, _replace_embed)
CODEPEN_RULE = Rule("codepen", _is_codepen, _replace_embed)
SCRIPT_RULE = Rule("script", _is_script, _replace_script)
IFRAME_RULE = Rule("iframe", _is_iframe, _replace_iframe)
FIGURE_RULE = Rule("figure", _is_figure, _replace_figure)
PRE_RULE = Rule("pre", _is_bare_pre, _replace_pre)
IMAGE_RULE = Rule("image", _is_image, _replace_image)

DEFAULT_RULES = RuleSet(
    [
        TWEET_RULE,
        CODEPEN_RULE,
        SCRIPT_RULE,
        IFRAME_RULE,
        FIGURE_RULE,
        PRE_RULE,
        IMAGE_RULE,
    ]
)
