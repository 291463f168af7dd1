"""Table of contents generation for a book."""

from __future__ import annotations

from collections.abc import Sequence

from .constants import CHAPTER_TITLE_PREFIX_PATTERN, CONTENTS_ANCHOR, CONTENTS_TITLE
from .models import Chapter, TocEntry, TocSection
from .renderer import extract_headings
from .slugify import generate_slug


def display_title(title: str) -> str:
    """Drop a leading ``第 N 章：`` or ``Chapter N:`` prefix from a title.

    Examples:
        display_title("第 2 章：并发")  # "并发"
        display_title("Chapter 3: Memory")  # "Memory"
    """
    return CHAPTER_TITLE_PREFIX_PATTERN.sub("", title)


def display_number(number: str) -> str:
    """Strip the trailing dot of a chapter number (``"2.1."`` -> ``"2.1"``)."""
    return number[:-1] if number.endswith(".") else number


def is_nested_number(number: str) -> bool:
    """Tell whether a chapter number has more than one level, such as ``1.1.``."""
    return number.count(".") > 1


def collect_sections(chapter: Chapter) -> tuple[TocSection, ...]:
    """List the second-level headings of a chapter with their anchors.

    Slugs come from the raw heading text, exactly as the renderer derives the
    ``id`` of the same heading.
    """
    return tuple(
        TocSection(title=heading.strip(), slug=generate_slug(heading))
        for heading in extract_headings(chapter.source, level=2)
    )


def collect_toc_entries(chapters: Sequence[Chapter]) -> list[TocEntry]:
    """Build contents entries for every chapter except front matter and contents.

    Args:
        chapters: All chapters of the book, in reading order. Not modified.

    Returns:
        list[TocEntry]: One entry per listed chapter, in the same order.
    """
    entries = []
    for chapter in chapters:
        if chapter.is_contents or chapter.is_front:
            continue
        entries.append(
            TocEntry(
                chapter=chapter,
                number=display_number(chapter.number),
                title=display_title(chapter.title),
                sections=collect_sections(chapter),
            )
        )
    return entries


def build_toc(chapters: Sequence[Chapter], heading: str = CONTENTS_TITLE) -> str:
    """Render the contents page fragment for a book.

    Every chapter gets a ``<li>`` linking to its page, followed by indented
    entries linking to each of its second-level headings.

    Args:
        chapters: All chapters of the book, in reading order.
        heading: Text of the contents page heading.

    Returns:
        str: HTML fragment with the heading and a ``<nav>``-wrapped ``<ol>``.

    Examples:
        build_toc([Chapter(id="01.00-intro", number="1.", title="Intro",
                           source="## Why\\n", output_file="01.00-intro.html")])
    """
    parts = [f'<h1 id="{CONTENTS_ANCHOR}">{heading}</h1>\n\n<nav epub:type="toc">\n<ol>\n']

    for entry in collect_toc_entries(chapters):
        output_file = entry.chapter.output_file
        css_class = ' class="indent"' if is_nested_number(entry.chapter.number) else ""
        parts.append(
            f'<li{css_class}><a href="{output_file}">{entry.number}. {entry.title}</a></li>\n'
        )
        for section in entry.sections:
            parts.append(
                f'<li class="indent"><a href="{output_file}#{section.slug}">'
                f"{section.title}</a></li>\n"
            )

    parts.append("</ol>\n</nav>\n")
    return "".join(parts)
