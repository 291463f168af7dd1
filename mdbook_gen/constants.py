"""Constants used across the mdbook-gen package."""

from __future__ import annotations

import re

# Block markers
FENCE_MARKER = "```"
DIAGRAM_LANGUAGE = "mermaid"
DEFAULT_CODE_LANGUAGE = "text"
QUOTE_PREFIX = "> "
COMMENT_PREFIX = "<!--"
TABLE_PREFIX = "|"
TABLE_SEPARATOR = "---"
RULE_LINES = ("---", "***")
UNORDERED_MARKERS = ("- ", "* ")
ORDERED_ITEM_PATTERN = re.compile(r"^\d+\. ")
CAPTION_PREFIXES = ("// ", "# ")
MAX_HEADING_LEVEL = 4
LIST_CONTINUATION_INDENT = 2
TAB_WIDTH = 4

# Inline patterns, applied in this order
IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
BOLD_PATTERN = re.compile(r"\*\*([^*]+)\*\*")
ITALIC_PATTERN = re.compile(r"\*([^*]+)\*")
INLINE_CODE_PATTERN = re.compile(r"`([^`]+)`")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

# Callouts
IMPORTANT_MARKERS = ("⚠️", "⚠", "注意", "警告", "重要")
HINT_MARKERS = ("💡", "提示")
IMPORTANT_KEYWORD_PATTERN = re.compile(r"\b(?:Warning|Important|Caution)\b")
HINT_KEYWORD_PATTERN = re.compile(r"\b(?:Tip|Hint)\b")
CALLOUT_GLYPH_PATTERN = re.compile("[💡⚠️❌✅]")
CALLOUT_LABELS = {
    "important": "Important:",
    "hint": "Hint:",
    "note": "Note:",
}

# Table of contents
CHAPTER_TITLE_PREFIX_PATTERN = re.compile(
    r"^(?:第\s*\d+\s*章|chapter\s+\d+)\s*[：:]\s*", re.IGNORECASE
)
CONTENTS_ANCHOR = "contents"

# Book layout
BOOK_DIR = "book"
CONFIG_FILE = "book.toml"
FRONT_MATTER_SOURCE = "00.00-frontmatter.md"
FRONT_MATTER_ID = "00.00-front-matter"
CONTENTS_SOURCE = "00.01-contents.md"
CONTENTS_ID = "00.01-contents"
TOP_CHAPTER_PATTERN = re.compile(r"^(\d+)-(.*?)\.md$")
DEFAULT_OUTPUT_DIR = "output.html"
DEFAULT_TITLE = "Untitled"
STYLESHEET_PATH = ("assets", "css", "main.css")
IMAGE_DIR = ("assets", "img")

# Labels
FRONT_MATTER_TITLE = "前言"
CONTENTS_TITLE = "目录"
PREVIOUS_LABEL = "上一章"
NEXT_LABEL = "下一章"
CHAPTER_INDICATOR = "第 {number} 章"

# Limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
