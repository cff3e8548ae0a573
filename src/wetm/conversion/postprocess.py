"""Cleanup applied to converted Markdown."""

import re

# "-" or "1." at the start of a line (after indentation), followed by 2+ spaces
LIST_MARKER_SPACING = re.compile(r"^([ \t]*)(-|\d+\.) {2,}", re.MULTILINE)


def collapse_list_marker_spacing(markdown: str) -> str:
    """Leave exactly one space between a list marker and the item text."""
    return LIST_MARKER_SPACING.sub(r"\1\2 ", markdown)


def postprocess(markdown: str) -> str:
    """Normalize converted Markdown. Running it twice changes nothing."""
    return collapse_list_marker_spacing(markdown)
