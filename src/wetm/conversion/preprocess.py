"""Text-level transforms applied to raw post HTML before conversion.

These run on the string, not on a parsed tree. Each pattern matches only the
markup documented beside it and anything else passes through untouched.
Order matters: later patterns assume earlier ones already ran.
"""

import re

from ..models.config import TranslatorConfig
from .rules import LANGUAGE_ATTRIBUTE

# Two consecutive line breaks, anywhere in the document
DOUBLE_LINE_BREAK = re.compile(r"(\r?\n){2}")
PARAGRAPH_MARKER = "\n<div></div>\n"

# <img ... src=".../name.ext" ...> where the src ends in an image extension
LOCAL_IMAGE = re.compile(r'(<img[^>]*src=")[^"]*?([^/"]+\.(?:gif|jpe?g|png|webp))("[^>]*>)', re.IGNORECASE)
IMAGES_DIRECTORY = "images/"

# <!--more--> or <!--more custom label-->
MORE_SEPARATOR = re.compile(r"<(!--more( .*)?--)>")

# <!-- wp:syntaxhighlighter/code {"language":"js"} --> followed by <pre ...>
CODE_LANGUAGE_COMMENT = re.compile(r'(<!-- wp:.+? \{"language":"(.+?)"\} -->\r?\n<pre )')


def preserve_paragraph_breaks(content: str) -> str:
    """
    Insert an empty ``<div>`` between double line breaks.

    The converter renders the blank div as a paragraph break, which keeps
    adjacent paragraphs separated when WordPress stored them as bare text.
    The pattern is global: it also fires inside ``<pre>`` blocks.
    """
    return DOUBLE_LINE_BREAK.sub(PARAGRAPH_MARKER, content)


def rewrite_local_images(content: str) -> str:
    """
    Point ``<img>`` sources at the relative ``images/`` folder.

    Everything before the filename is replaced, so
    ``https://example.com/wp-content/uploads/a.png`` becomes ``images/a.png``.
    Sources with a query string or an unknown extension are left alone.
    """
    return LOCAL_IMAGE.sub(r"\1" + IMAGES_DIRECTORY + r"\2\3", content)


def escape_more_separator(content: str) -> str:
    """
    Protect the first "more" separator from being dropped as a comment.

    Its angle brackets are entity-escaped, so the converter emits it as the
    literal text ``<!--more-->``. Later separators stay comments.
    """
    return MORE_SEPARATOR.sub(r"&lt;\1&gt;", content, count=1)


def inject_code_languages(content: str) -> str:
    """Copy the language from a WordPress code block comment onto the ``<pre>`` below it."""
    return CODE_LANGUAGE_COMMENT.sub(r'\1' + LANGUAGE_ATTRIBUTE + r'="\2" ', content)


def preprocess(content: str, config: TranslatorConfig) -> str:
    """
    Run every text-level transform in order.

    Args:
        content: Raw post HTML
        config: Translator options (``save_scraped_images`` gates the image rewrite)

    Returns:
        Annotated HTML ready for conversion
    """
    content = preserve_paragraph_breaks(content)

    if config.save_scraped_images:
        # images are saved to a relative images/ folder, so update references to match
        content = rewrite_local_images(content)

    content = escape_more_separator(content)
    content = inject_code_languages(content)
    return content
