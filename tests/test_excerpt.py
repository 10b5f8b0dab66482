"""Tests for the listing excerpt helpers."""

from __future__ import annotations

from foliopress.markdown.excerpt import first_image_url, first_sentences


class TestFirstImageUrl:
    """Tests for first_image_url function."""

    def test_extracts_image_url(self) -> None:
        markdown = """
Here is some introductory text.
![Test Alt Text](https://example.com/test-image.webp)
More text below.
        """
        assert first_image_url(markdown) == "https://example.com/test-image.webp"

    def test_returns_none_without_image(self) -> None:
        assert first_image_url("Just some text with a [Link](https://google.com)") is None

    def test_returns_first_of_many(self) -> None:
        markdown = """
![First Image](https://example.com/first.png)
![Second Image](https://example.com/second.png)
        """
        assert first_image_url(markdown) == "https://example.com/first.png"

    def test_image_with_title(self) -> None:
        assert first_image_url('![a](/img/x.png "Title")') == "/img/x.png"


class TestFirstSentences:
    """Tests for first_sentences function."""

    def test_strips_markup_and_keeps_three_sentences(self) -> None:
        markdown = """
# Hello World
This is **bold** text. This is a [link](https://example.com).
Here is the third sentence! And this is the fourth sentence that should be ignored.
        """
        assert first_sentences(markdown) == (
            "Hello World This is bold text. This is a link. Here is the third sentence!"
        )

    def test_short_text_is_returned_whole(self) -> None:
        assert first_sentences("Just one simple sentence.") == "Just one simple sentence."

    def test_inline_code_is_removed(self) -> None:
        assert first_sentences("Hello. `var x = 1;` This is next. Wow.") == "Hello. This is next. Wow."

    def test_code_blocks_tags_and_images_are_removed(self) -> None:
        markdown = (
            "Intro.\n\n```python\nprint('a. b. c.')\n```\n\n"
            '{% youtube id="abc" /%}\n\n'
            "![cover](/x.png)\n\n"
            "- Item one?\n> Quoted line.\n"
        )
        assert first_sentences(markdown) == "Intro. Item one? Quoted line."

    def test_count(self) -> None:
        assert first_sentences("One. Two. Three.", count=1) == "One."

    def test_no_terminator(self) -> None:
        assert first_sentences("no punctuation here") == "no punctuation here"

    def test_snake_case_is_not_emphasis(self) -> None:
        assert first_sentences("Call my_func_name now.") == "Call my_func_name now."

    def test_empty(self) -> None:
        assert first_sentences("") == ""
