"""Text cleaning helpers for post content sent to the entity services."""

import re
import html as htmllib
from typing import Optional

MAX_TEXT_LENGTH = 5000
MIN_TEXT_LENGTH = 50

PLACEHOLDER_TEXT = (
    "Failed to send post to Azure endpoint, either post_content is to short or empty, "
    "or other error has occured"
)


def strip_tags(text: Optional[str]) -> Optional[str]:
    """Unescape entities and remove HTML tags and comments.

    Args:
        text: Post content potentially containing markup

    Returns:
        Plain text, or the input unchanged if it was None or empty

    Examples:
        >>> strip_tags("<p>Henry Ford &amp; Toyota</p>")
        'Henry Ford & Toyota'
    """
    if not text:
        return text

    # Entities are decoded first so escaped markup is stripped as well
    text = htmllib.unescape(text)
    text = re.sub(r"<!--.*?-->", "", text, flags=re.DOTALL)
    return re.sub(r"<[^>]+>", "", text)


def prepare_service_text(
    raw: Optional[str],
    *,
    max_length: int = MAX_TEXT_LENGTH,
    min_length: int = MIN_TEXT_LENGTH,
) -> str:
    """Clean post content for the Azure entities endpoint.

    Tags are stripped first, then the text is cut to ``max_length`` characters.
    Text shorter than ``min_length`` after cleaning is replaced with
    ``PLACEHOLDER_TEXT`` so the request still goes out.

    Examples:
        >>> prepare_service_text("<b>hi</b>") == PLACEHOLDER_TEXT
        True
    """
    text = strip_tags(raw or "") or ""
    if len(text) > max_length:
        text = text[:max_length]
    if len(text) < min_length:
        return PLACEHOLDER_TEXT
    return text
