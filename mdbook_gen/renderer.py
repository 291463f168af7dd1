"""Markdown to HTML block rendering."""

from __future__ import annotations

import html

from .constants import (
    CALLOUT_GLYPH_PATTERN,
    CALLOUT_LABELS,
    CAPTION_PREFIXES,
    COMMENT_PREFIX,
    DEFAULT_CODE_LANGUAGE,
    DEFAULT_TITLE,
    DIAGRAM_LANGUAGE,
    FENCE_MARKER,
    HINT_KEYWORD_PATTERN,
    HINT_MARKERS,
    IMPORTANT_KEYWORD_PATTERN,
    IMPORTANT_MARKERS,
    LIST_CONTINUATION_INDENT,
    MAX_HEADING_LEVEL,
    ORDERED_ITEM_PATTERN,
    QUOTE_PREFIX,
    RULE_LINES,
    TAB_WIDTH,
    TABLE_PREFIX,
    TABLE_SEPARATOR,
    UNORDERED_MARKERS,
)
from .inline import format_inline
from .models import (
    BlockState,
    HeadingMatch,
    Idle,
    InCode,
    InList,
    InTable,
    LineKind,
    ListItemMatch,
    ListKind,
)
from .slugify import generate_slug


def split_lines(content: str) -> list[str]:
    """Split text on ``\\n`` only, dropping the ``\\r`` of CRLF line endings.

    Unlike `str.splitlines`, form feeds and Unicode line separators stay
    inside their line.
    """
    return [line.removesuffix("\r") for line in content.split("\n")]


def indent_columns(line: str) -> int:
    """Count leading whitespace columns, a tab counting as four.

    Examples:
        indent_columns("  - item")  # 2
        indent_columns("\\ttext")  # 4
    """
    columns = 0
    for character in line:
        if character == " ":
            columns += 1
        elif character == "\t":
            columns += TAB_WIDTH
        else:
            break
    return columns


def match_fence(line: str) -> str | None:
    """Return the info string of a fence line, or None for other lines.

    A closing fence yields an empty string.
    """
    if not line.startswith(FENCE_MARKER):
        return None
    return line[len(FENCE_MARKER) :].strip()


def match_caption(line: str) -> str | None:
    """Extract a filename from a comment line directly below an opening fence.

    The second whitespace-separated token counts as a filename when it
    contains a dot or a slash.

    Examples:
        match_caption("// main.go")  # "main.go"
        match_caption("# scripts/setup")  # "scripts/setup"
        match_caption("// just a remark")  # None
    """
    trimmed = line.strip()
    if not trimmed.startswith(CAPTION_PREFIXES):
        return None
    parts = trimmed.split()
    if len(parts) >= 2 and ("." in parts[1] or "/" in parts[1]):
        return parts[1]
    return None


def match_heading(line: str) -> HeadingMatch | None:
    """Match ``#`` through ``####`` headings at the very start of the line."""
    for level in range(1, MAX_HEADING_LEVEL + 1):
        prefix = "#" * level + " "
        if line.startswith(prefix):
            return HeadingMatch(level=level, text=line[len(prefix) :])
    return None


def match_list_item(line: str) -> ListItemMatch | None:
    """Match ``- ``, ``* `` and ``N. `` list items, ignoring indentation."""
    trimmed = line.strip()
    for marker in UNORDERED_MARKERS:
        if trimmed.startswith(marker):
            return ListItemMatch(kind=ListKind.UNORDERED, text=trimmed[len(marker) :])
    ordered_match = ORDERED_ITEM_PATTERN.match(trimmed)
    if ordered_match:
        return ListItemMatch(kind=ListKind.ORDERED, text=trimmed[ordered_match.end() :])
    return None


def is_table_row(line: str) -> bool:
    return line.strip().startswith(TABLE_PREFIX)


def is_separator_row(line: str) -> bool:
    return is_table_row(line) and TABLE_SEPARATOR in line


def is_quote_line(line: str) -> bool:
    return line.startswith(QUOTE_PREFIX)


def is_rule(line: str) -> bool:
    return line.strip() in RULE_LINES


def is_comment(line: str) -> bool:
    return line.strip().startswith(COMMENT_PREFIX)


def classify_line(line: str) -> LineKind:
    """Classify a line found outside a code block.

    Checks run in rendering precedence and the first match wins, so a line
    such as ``---`` is a rule rather than text and ``| a |`` is a table row
    even though it would also be plain text.

    Args:
        line: A single line without its trailing newline.

    Returns:
        LineKind: The kind the renderer will treat the line as.

    Examples:
        classify_line("```python")  # LineKind.FENCE
        classify_line("## Setup")  # LineKind.HEADING
        classify_line("   ")  # LineKind.BLANK
    """
    if match_fence(line) is not None:
        return LineKind.FENCE
    if is_comment(line):
        return LineKind.COMMENT
    if is_table_row(line):
        return LineKind.TABLE_ROW
    if is_quote_line(line):
        return LineKind.QUOTE
    if match_heading(line) is not None:
        return LineKind.HEADING
    if is_rule(line):
        return LineKind.RULE
    if match_list_item(line) is not None:
        return LineKind.LIST_ITEM
    if not line.strip():
        return LineKind.BLANK
    return LineKind.TEXT


def close_block(state: BlockState) -> tuple[BlockState, str]:
    """Close whatever block is open.

    Args:
        state: Current block state.

    Returns:
        tuple[BlockState, str]: `Idle` and the closing tags for `state`
            (empty when nothing was open).
    """
    if isinstance(state, InCode):
        closing = "</div>\n" if state.diagram else "</code></pre>\n</figure>\n"
        return Idle(), closing
    if isinstance(state, InTable):
        return Idle(), "</tbody>\n</table>\n"
    if isinstance(state, InList):
        closing = "</li>\n" if state.item_open else ""
        return Idle(), f"{closing}</{state.kind.value}>\n"
    return Idle(), ""


def open_code(lang: str, caption: str | None = None) -> tuple[InCode, str]:
    """Open a code block or, for diagram sources, a diagram container."""
    lang = lang or DEFAULT_CODE_LANGUAGE
    if lang == DIAGRAM_LANGUAGE:
        return InCode(lang=lang, diagram=True), f'<div class="{DIAGRAM_LANGUAGE}">\n'

    parts = [f'<figure class="code {lang}">\n']
    if caption:
        parts.append(f"<figcaption>File: {html.escape(caption)}</figcaption>\n")
    parts.append(f'<pre><code class="language-{lang}">')
    return InCode(lang=lang, caption=caption), "".join(parts)


def code_line(state: InCode, line: str) -> str:
    if state.diagram:
        return line + "\n"
    return html.escape(line, quote=False) + "\n"


def render_table_row(row: str, cell_tag: str) -> str:
    """Render one ``| a | b |`` row with `cell_tag` (``th`` or ``td``) cells."""
    cells = row.strip().strip(TABLE_PREFIX).split(TABLE_PREFIX)
    parts = ["<tr>\n"]
    for cell in cells:
        parts.append(f"<{cell_tag}>{format_inline(cell.strip())}</{cell_tag}>\n")
    parts.append("</tr>\n")
    return "".join(parts)


def open_table(header_row: str) -> tuple[InTable, str]:
    return InTable(), f"<table>\n<thead>\n{render_table_row(header_row, 'th')}</thead>\n<tbody>\n"


def add_list_item(state: BlockState, item: ListItemMatch) -> tuple[InList, str]:
    """Start a new list item, opening or switching the list as needed.

    A marker of the other kind closes the current list and starts a new one;
    otherwise the previous item is closed. The new item is left open so that
    indented continuation lines end up inside it.
    """
    parts = []
    if isinstance(state, InList) and state.kind is not item.kind:
        state, closing = close_block(state)
        parts.append(closing)

    if isinstance(state, InList):
        if state.item_open:
            parts.append("</li>\n")
    else:
        parts.append(f"<{item.kind.value}>\n")

    parts.append(f"<li><p>{format_inline(item.text)}</p>")
    return InList(kind=item.kind, item_open=True), "".join(parts)


def _ends_list(line: str, kind: LineKind) -> bool:
    if kind is LineKind.LIST_ITEM:
        return False
    if indent_columns(line) < LIST_CONTINUATION_INDENT:
        return True
    # Indented structural lines still end the list.
    return kind in (LineKind.RULE, LineKind.COMMENT) or line.strip().startswith("#")


def classify_callout(content: str) -> str:
    """Pick the callout kind for the joined text of a blockquote run.

    Warning markers win over hint markers; anything else is a plain note.
    English keywords only count as whole words.
    """
    if any(marker in content for marker in IMPORTANT_MARKERS):
        return "important"
    if IMPORTANT_KEYWORD_PATTERN.search(content):
        return "important"
    if any(marker in content for marker in HINT_MARKERS):
        return "hint"
    if HINT_KEYWORD_PATTERN.search(content):
        return "hint"
    return "note"


def render_callout(quote_lines: list[str]) -> str:
    """Render the text of consecutive ``> `` lines as a single callout."""
    content = "\n".join(quote_lines)
    kind = classify_callout(content)
    content = CALLOUT_GLYPH_PATTERN.sub("", content).strip()

    rendered = [format_inline(line.strip()) for line in content.split("\n") if line.strip()]
    body = "<br>\n".join(rendered)
    label = CALLOUT_LABELS[kind]
    return f'<aside class="{kind}"><p>\n<strong>{label}</strong> {body}\n</p></aside>\n'


def render_heading(heading: HeadingMatch) -> str:
    slug = generate_slug(heading.text)
    level = heading.level
    return f'<h{level} id="{slug}">{format_inline(heading.text)}</h{level}>\n\n'


def render_markdown(content: str) -> str:
    """Render one chapter of Markdown into an HTML fragment.

    Lines are processed top to bottom and each is handled by the first
    matching rule: code fences, code block bodies, list termination, HTML
    comments, table rows, blockquote callouts, headings, horizontal rules,
    list items and finally paragraphs. Blocks still open at the end of the
    input are closed, so malformed Markdown degrades instead of failing.

    Args:
        content: Raw Markdown text of a chapter.

    Returns:
        str: HTML fragment without document-level wrapper elements.

    Examples:
        render_markdown("## Intro\\n\\nSome *text*.\\n")
    """
    lines = split_lines(content)
    output: list[str] = []
    state: BlockState = Idle()

    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1

        if isinstance(state, InCode):
            if match_fence(line) is not None:
                state, closing = close_block(state)
                output.append(closing)
            else:
                output.append(code_line(state, line))
            continue

        kind = classify_line(line)

        if kind is LineKind.FENCE:
            state, closing = close_block(state)
            output.append(closing)
            lang = match_fence(line)
            caption = None
            if lang != DIAGRAM_LANGUAGE and i < len(lines):
                caption = match_caption(lines[i])
                if caption is not None:
                    i += 1
            state, opening = open_code(lang, caption)
            output.append(opening)
            continue

        if isinstance(state, InList) and _ends_list(line, kind):
            state, closing = close_block(state)
            output.append(closing)

        if kind is LineKind.COMMENT:
            continue

        if kind is LineKind.TABLE_ROW:
            if isinstance(state, InTable):
                output.append(render_table_row(line, "td"))
            else:
                # Tables never nest inside list items.
                state, closing = close_block(state)
                output.append(closing)
                state, opening = open_table(line)
                output.append(opening)
                if i < len(lines) and is_separator_row(lines[i]):
                    i += 1
            continue
        if isinstance(state, InTable):
            state, closing = close_block(state)
            output.append(closing)

        if kind is LineKind.QUOTE:
            quote_lines = [line[len(QUOTE_PREFIX) :]]
            while i < len(lines) and is_quote_line(lines[i]):
                quote_lines.append(lines[i][len(QUOTE_PREFIX) :])
                i += 1
            output.append(render_callout(quote_lines))
            continue

        if kind is LineKind.HEADING:
            output.append(render_heading(match_heading(line)))
            continue

        if kind is LineKind.RULE:
            output.append("<hr />\n\n")
            continue

        if kind is LineKind.LIST_ITEM:
            state, item_html = add_list_item(state, match_list_item(line))
            output.append(item_html)
            continue

        if kind is LineKind.TEXT:
            output.append(f"<p>{format_inline(line.strip())}</p>\n\n")

    state, closing = close_block(state)
    output.append(closing)
    return "".join(output)


def _lines_outside_code(content: str):
    in_code = False
    for line in split_lines(content):
        if match_fence(line) is not None:
            in_code = not in_code
            continue
        if not in_code:
            yield line


def extract_headings(content: str, level: int = 2) -> list[str]:
    """Collect the raw text of headings of one level, skipping fenced code.

    Uses the same heading rule as `render_markdown`, so slugs computed from
    the returned text match the ids in the rendered chapter.

    Args:
        content: Raw Markdown text.
        level: Heading level to collect.

    Returns:
        list[str]: Heading texts in document order, prefix removed.
    """
    headings = []
    for line in _lines_outside_code(content):
        heading = match_heading(line)
        if heading is not None and heading.level == level:
            headings.append(heading.text)
    return headings


def extract_title(content: str, default: str = DEFAULT_TITLE) -> str:
    """Return the text of the first level-one heading, or `default`."""
    for line in _lines_outside_code(content):
        trimmed = line.strip()
        if trimmed.startswith("# "):
            return trimmed[2:]
    return default
