"""Inline Markdown formatting."""

from __future__ import annotations

from .constants import (
    BOLD_PATTERN,
    IMAGE_PATTERN,
    INLINE_CODE_PATTERN,
    ITALIC_PATTERN,
    LINK_PATTERN,
)

# Order matters: bold must consume ``**x**`` before the italic rule sees it,
# and images must go before links since ``![a](b)`` contains ``[a](b)``.
INLINE_RULES = (
    (IMAGE_PATTERN, r'<figure class="img"><img src="\2" alt="\1"></figure>'),
    (BOLD_PATTERN, r"<strong>\1</strong>"),
    (ITALIC_PATTERN, r"<em>\1</em>"),
    (INLINE_CODE_PATTERN, r"<code>\1</code>"),
    (LINK_PATTERN, r'<a href="\2">\1</a>'),
)


def format_inline(text: str) -> str:
    """Rewrite inline Markdown spans of a single line into HTML.

    Images, bold, italic, inline code and links are substituted in that
    order. Content is not escaped; text that matches no rule is returned
    unchanged.

    Args:
        text: One line of Markdown outside any code block.

    Returns:
        str: The line with inline spans converted to HTML.

    Examples:
        format_inline("**bold** and *italic*")
        # "<strong>bold</strong> and <em>italic</em>"
    """
    for pattern, replacement in INLINE_RULES:
        text = pattern.sub(replacement, text)
    return text
