"""Tests for the translation pipeline and post-level entry points."""

import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from wetm import (
    ConversionError,
    TranslatorConfig,
    get_post_content,
    init_converter,
    translate_content,
    translate_post,
)
from wetm.pipeline import (
    ConvertStep,
    PostContext,
    PostprocessStep,
    PreprocessStep,
    TranslationPipeline,
    TranslationStep,
)


class RecordingConverter:
    """Converter stub that records its input and returns canned Markdown."""

    def __init__(self, markdown: str = ""):
        self.markdown = markdown
        self.seen: list = []

    def convert(self, html: str) -> str:
        self.seen.append(html)
        return self.markdown


class BrokenConverter:
    """Converter stub that always fails."""

    def convert(self, html: str) -> str:
        raise ValueError("boom")


class TestTranslationPipeline:
    """Tests for TranslationPipeline."""

    def test_steps_satisfy_protocol(self):
        """Test the built-in steps implement TranslationStep."""
        for step in (PreprocessStep(), ConvertStep(RecordingConverter()), PostprocessStep()):
            assert isinstance(step, TranslationStep)

    def test_stages_run_in_order(self):
        """Test the converter sees preprocessed HTML and its output is cleaned up."""
        converter = RecordingConverter("-   item")
        pipeline = TranslationPipeline(steps=[PreprocessStep(), ConvertStep(converter), PostprocessStep()])

        ctx = pipeline.execute(PostContext(content="a\n\nb"))

        assert converter.seen == ["a\n<div></div>\nb"]
        assert ctx.markdown == "- item"

    def test_failure_raises_conversion_error(self):
        """Test a failing step aborts with ConversionError naming the step."""
        with pytest.raises(ConversionError) as exc_info:
            translate_content("<p>x</p>", TranslatorConfig(), BrokenConverter())

        assert exc_info.value.step == "convert"
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert "boom" in str(exc_info.value)

    def test_postprocess_without_convert_fails(self):
        """Test postprocessing refuses to run before conversion."""
        pipeline = TranslationPipeline(steps=[PostprocessStep()])

        with pytest.raises(ConversionError, match="postprocess"):
            pipeline.execute(PostContext(content="<p>x</p>"))

    def test_add_step_is_fluent(self):
        """Test add_step returns the pipeline."""
        pipeline = TranslationPipeline(steps=[])
        assert pipeline.add_step(PreprocessStep()) is pipeline
        assert len(pipeline.steps) == 1


class TestTranslateContent:
    """End-to-end tests for translate_content."""

    def test_single_image(self):
        """Test a lone image becomes exactly one Image tag."""
        result = translate_content('<p><img src="X"></p>')

        assert result.count("<Image") == 1
        assert 'filename="X"' in result

    def test_saved_images_relative(self):
        """Test image references move under images/ when saving is enabled."""
        config = TranslatorConfig(save_scraped_images=True)

        assert 'filename="images/photo.png"' in translate_content('<img src="photo.png">', config)
        assert 'filename="images/x.png"' in translate_content('<img src="https://cdn.example/x.png">', config)

    def test_saved_images_disabled(self):
        """Test image references are untouched by default."""
        result = translate_content('<img src="https://cdn.example/x.png">')

        assert 'filename="https://cdn.example/x.png"' in result

    def test_figure_with_caption(self):
        """Test figures produce a captioned Image tag."""
        result = translate_content('<figure><img src="a.jpg"><figcaption>Caption text</figcaption></figure>')

        assert 'filename="a.jpg"' in result
        assert 'caption="Caption text"' in result

    def test_figure_without_image(self):
        """Test figures without an image produce nothing."""
        assert translate_content("<figure><figcaption>Nothing</figcaption></figure>") == ""

    def test_code_language(self):
        """Test a WordPress code block comment becomes the fence language."""
        html = '<!-- wp:code {"language":"js"} -->\n<pre class="wp-block-code">const a = 1;</pre>\n<!-- /wp:code -->'

        result = translate_content(html)

        assert "```js\nconst a = 1;\n```" in result
        assert "wp:code" not in result

    def test_code_class_language(self):
        """Test a language-* class on the code element becomes the fence language."""
        assert translate_content('<pre><code class="language-js">a=1</code></pre>') == "```js\na=1\n```"

    def test_codepen_attribute_order(self):
        """Test codepen embed attributes keep their written order."""
        html = '<p class="codepen" data-slug-hash="abc" data-height="265">See the Pen</p>'

        assert html in translate_content(html)

    def test_single_more_marker(self):
        """Test only the first more separator survives."""
        html = "<p>Intro</p>\n<!--more-->\n<p>Body</p>\n<!--more-->\n<p>End</p>"

        result = translate_content(html)

        assert result.count("<!--more-->") == 1
        assert result.index("Intro") < result.index("<!--more-->") < result.index("Body")

    def test_more_marker_with_label(self):
        """Test a labelled separator keeps its label."""
        result = translate_content("<p>Intro</p>\n<!--more Keep reading-->\n<p>Body</p>")

        assert "<!--more Keep reading-->" in result

    def test_paragraph_breaks(self):
        """Test bare-text paragraphs stay separated."""
        result = translate_content("First paragraph.\n\nSecond paragraph.")

        assert re.search(r"First paragraph\.\s*\n\n\s*Second paragraph\.", result)

    def test_tweet_embed_with_script(self):
        """Test tweet markup and its script survive verbatim."""
        html = (
            '<blockquote class="twitter-tweet"><p>Hello</p></blockquote>\n'
            '<script async src="https://platform.twitter.com/widgets.js" charset="utf-8"></script>'
        )

        result = translate_content(html)

        assert '<blockquote class="twitter-tweet"><p>Hello</p></blockquote>' in result
        assert '<script async src="https://platform.twitter.com/widgets.js" charset="utf-8"></script>' in result

    def test_iframe_embed(self):
        """Test iframes are kept with normalized attributes."""
        html = '<p>Watch:</p><iframe src="https://www.youtube.com/embed/x" frameborder="0" allowfullscreen></iframe>'

        result = translate_content(html)

        assert '<iframe src="https://www.youtube.com/embed/x" allowFullScreen></iframe>' in result

    def test_list_spacing(self):
        """Test list items have a single space after the marker."""
        result = translate_content("<ul><li>One</li><li>Two</li></ul>")

        assert "- One" in result
        assert not re.search(r"^- {2,}", result, re.MULTILINE)

    def test_empty_content(self):
        """Test empty content translates to empty Markdown."""
        assert translate_content("") == ""

    def test_malformed_html_degrades(self):
        """Test unbalanced markup still produces text."""
        result = translate_content("<p>Unclosed <strong>bold<p>Next")

        assert "Unclosed" in result
        assert "Next" in result

    def test_shared_converter_across_threads(self):
        """Test one converter can serve concurrent translations."""
        converter = init_converter()
        config = TranslatorConfig()
        posts = [f'<p>Post {i}</p><figure><img src="{i}.png"></figure>' for i in range(20)]

        expected = [translate_content(post, config, converter) for post in posts]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda post: translate_content(post, config, converter), posts))

        assert results == expected


class TestPostEntryPoints:
    """Tests for get_post_content and translate_post."""

    @pytest.fixture
    def post_data(self):
        """Feed item shaped like a parsed export item."""
        return {
            "title": ["Hello World"],
            "post_date": ["2020-01-01 12:00:00"],
            "creator": ["jane.doe"],
            "encoded": ["<p>Body text</p>"],
        }

    def test_get_post_content(self, post_data):
        """Test the first encoded value is translated."""
        result = get_post_content(post_data, init_converter(), TranslatorConfig())

        assert result == "Body text"

    def test_get_post_content_missing_encoded(self):
        """Test items with no content translate to empty Markdown."""
        assert get_post_content({}, init_converter(), TranslatorConfig()) == ""

    def test_translate_post_without_frontmatter(self, post_data):
        """Test frontmatter is off by default."""
        result = translate_post(post_data)

        assert not result.startswith("---")
        assert "Body text" in result

    def test_translate_post_with_frontmatter(self, post_data):
        """Test frontmatter carries title, date and authors."""
        result = translate_post(post_data, TranslatorConfig(add_frontmatter=True))

        assert result.startswith(
            '---\ntitle: "Hello World"\ndate: "2020-01-01 12:00:00"\nauthors:\n  - "jane doe"\n---\n\n'
        )
        assert result.endswith("Body text")
