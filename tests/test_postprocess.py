"""Tests for Markdown cleanup."""

from wetm.conversion.postprocess import collapse_list_marker_spacing, postprocess

SAMPLES = [
    "-    item",
    "1.   First\n2.  Second",
    "Intro\n\n-   a\n    -   nested\n\nOutro",
    "- already fine",
    "a -  b stays",
    "",
]


class TestCollapseListMarkerSpacing:
    """Tests for collapse_list_marker_spacing."""

    def test_bullet(self):
        """Test extra spaces after a dash collapse."""
        assert collapse_list_marker_spacing("-    item") == "- item"

    def test_ordered(self):
        """Test extra spaces after a number collapse."""
        assert collapse_list_marker_spacing("1.   First\n10.  Tenth") == "1. First\n10. Tenth"

    def test_nested_indentation_kept(self):
        """Test indentation before the marker is preserved."""
        assert collapse_list_marker_spacing("-   a\n    -   b") == "- a\n    - b"

    def test_mid_line_dash_untouched(self):
        """Test dashes inside a line are not list markers."""
        assert collapse_list_marker_spacing("a -  b") == "a -  b"


class TestPostprocess:
    """Tests for the combined postprocess stage."""

    def test_idempotent(self):
        """Test running postprocess twice equals running it once."""
        for sample in SAMPLES:
            once = postprocess(sample)
            assert postprocess(once) == once

    def test_leaves_other_markdown_alone(self):
        """Test non-list content passes through."""
        markdown = "# Title\n\nSome *text* with `code`.\n\n```js\nconst a = 1;\n```"
        assert postprocess(markdown) == markdown
