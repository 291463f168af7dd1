"""Data models for mdbook-gen."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


class LineKind(Enum):
    """Kinds a Markdown line can be classified as outside a code block.

    Attributes:
        FENCE: Opening or closing code fence.
        TABLE_ROW: Row of a pipe table.
        QUOTE: Blockquote line, rendered as part of a callout.
        HEADING: Heading of level one to four.
        RULE: Horizontal rule.
        LIST_ITEM: Unordered or ordered list item.
        COMMENT: HTML comment, dropped from the output.
        BLANK: Empty or whitespace-only line.
        TEXT: Anything else; rendered as a paragraph.
    """

    FENCE = auto()
    TABLE_ROW = auto()
    QUOTE = auto()
    HEADING = auto()
    RULE = auto()
    LIST_ITEM = auto()
    COMMENT = auto()
    BLANK = auto()
    TEXT = auto()


class ListKind(Enum):
    """List flavours, valued by their HTML tag."""

    UNORDERED = "ul"
    ORDERED = "ol"


@dataclass(frozen=True)
class Idle:
    """No block is open."""


@dataclass(frozen=True)
class InCode:
    """Inside a fenced code block.

    Attributes:
        lang: Language tag from the opening fence.
        caption: Filename shown above the block, if any.
        diagram: True for diagram blocks whose lines pass through unescaped.
    """

    lang: str
    caption: str | None = None
    diagram: bool = False


@dataclass(frozen=True)
class InTable:
    """Inside a pipe table; the header row has been emitted."""


@dataclass(frozen=True)
class InList:
    """Inside a list.

    Attributes:
        kind: Flavour of the open list.
        item_open: Whether the last `<li>` still awaits its closing tag.
    """

    kind: ListKind
    item_open: bool = False


BlockState = Union[Idle, InCode, InTable, InList]


@dataclass(frozen=True)
class HeadingMatch:
    """Heading level and the raw text following the ``#`` prefix."""

    level: int
    text: str


@dataclass(frozen=True)
class ListItemMatch:
    """List flavour and the item text with its marker removed."""

    kind: ListKind
    text: str


@dataclass(frozen=True)
class Chapter:
    """One chapter of a book.

    Attributes:
        id: Output file name without extension.
        number: Display number such as ``"2."`` or ``"2.1."``; empty for
            front matter and contents.
        title: Text of the first level-one heading, or a fallback.
        source: Raw Markdown text.
        input_file: File name the source was read from.
        output_file: HTML file name the chapter is written to.
        category: Category of the top-level chapter, if configured.
        is_contents: True for the synthesized table of contents.
        is_front: True for the front matter page.
    """

    id: str
    title: str
    source: str = ""
    number: str = ""
    input_file: str = ""
    output_file: str = ""
    category: str = ""
    is_contents: bool = False
    is_front: bool = False


@dataclass(frozen=True)
class TocSection:
    """Second-level heading listed under a chapter in the contents."""

    title: str
    slug: str


@dataclass(frozen=True)
class TocEntry:
    """Contents entry for one chapter.

    Attributes:
        chapter: The chapter being listed.
        number: Display number without its trailing dot.
        title: Title with any ``Chapter N:`` style prefix removed.
        sections: Second-level headings of the chapter, in order.
    """

    chapter: Chapter
    number: str
    title: str
    sections: tuple[TocSection, ...] = ()
