import re
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from taxcat.core.text_utils import PLACEHOLDER_TEXT, prepare_service_text, strip_tags  # noqa: E402


def test_strip_tags_removes_markup_and_comments():
    raw = "<p>Henry Ford &amp; <a href='x'>Toyota</a></p><!-- wp:paragraph -->"
    assert strip_tags(raw) == "Henry Ford & Toyota"
    assert strip_tags(None) is None


def test_placeholder_text_is_exact():
    assert PLACEHOLDER_TEXT == (
        "Failed to send post to Azure endpoint, either post_content is to short or empty, "
        "or other error has occured"
    )


def test_long_text_is_truncated_after_stripping():
    raw = "<p>" + ("word " * 2000) + "</p>"
    text = prepare_service_text(raw)
    assert len(text) == 5000
    assert "<" not in text and ">" not in text


@pytest.mark.parametrize("raw", [None, "", "<p></p>", "<b>too short</b>", "x" * 49])
def test_short_text_is_replaced_with_placeholder(raw):
    assert prepare_service_text(raw) == PLACEHOLDER_TEXT


def test_text_at_minimum_length_is_sent_as_is():
    raw = "<em>" + "y" * 50 + "</em>"
    assert prepare_service_text(raw) == "y" * 50


def test_limits_are_configurable():
    text = prepare_service_text("abcdefghij" * 3, max_length=12, min_length=5)
    assert text == "abcdefghijab"


@pytest.mark.parametrize(
    "raw",
    [
        "<p>&lt;b&gt;x&lt;/b&gt; Henry Ford founded Ford Motor Company in Detroit, Michigan.</p>",
        '<!-- wp:code --><pre><code>&lt;script src="x.js"&gt;&lt;/script&gt; '
        "Henry Ford founded Ford Motor Company in Detroit.</code></pre>",
        "&lt;!-- hidden --&gt;Henry Ford founded Ford Motor Company in Detroit, Michigan.",
    ],
)
def test_escaped_markup_never_reaches_service_text(raw):
    text = prepare_service_text(raw)
    assert not re.search(r"<[^>]+>", text)
    assert "Henry Ford founded Ford Motor Company in Detroit" in text


def test_double_escaped_entities_decode_once():
    assert strip_tags("Toyota &amp;lt;Prius&amp;gt;") == "Toyota &lt;Prius&gt;"
