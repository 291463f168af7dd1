"""Slug generation for Markdown headings."""

from __future__ import annotations

import re

# Leading chapter/section numbering such as "1.2 " or "第3章：".
NUMBERING_PREFIX_PATTERN = re.compile(r"^[第\d.\s章节：]+")

# Unicode Han script: radicals, iteration/number marks, unified and
# compatibility ideographs including the supplementary planes.
HAN_RANGES = (
    "⺀-⺙"
    "⺛-⻳"
    "⼀-⿕"
    "々"
    "〇"
    "〡-〩"
    "〸-〻"
    "㐀-䶿"
    "一-鿿"
    "豈-舘"
    "並-龎"
    "\U00020000-\U0002a6df"
    "\U0002a700-\U0002ebef"
    "\U0002f800-\U0002fa1d"
    "\U00030000-\U0003134f"
)
DISALLOWED_PATTERN = re.compile(rf"[^a-z0-9{HAN_RANGES}-]")
HYPHEN_RUN_PATTERN = re.compile(r"-+")


def generate_slug(title: str) -> str:
    """Generate an anchor identifier from a heading's display text.

    Strips leading numbering, lowercases, turns spaces into hyphens and keeps
    only ASCII letters, digits, Han ideographs and hyphens. The body renderer
    and the contents builder both call this on the raw heading text, so the
    result must depend on nothing but `title`.

    Args:
        title: Heading text without the ``#`` prefix.

    Returns:
        str: Hyphen-separated slug. May be empty when nothing survives
            normalization; duplicate titles give duplicate slugs.

    Examples:
        generate_slug("Hello World")  # "hello-world"
        generate_slug("1.2 Getting Started")  # "getting-started"
        generate_slug("第3章：并发模型")  # "并发模型"
    """
    slug = NUMBERING_PREFIX_PATTERN.sub("", title)
    slug = slug.lower()
    slug = slug.replace(" ", "-")
    slug = DISALLOWED_PATTERN.sub("", slug)
    slug = HYPHEN_RUN_PATTERN.sub("-", slug)
    return slug.strip("-")
