"""
mdbook-gen: paginated HTML books from Markdown chapters.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    mdbook-gen init my-book
    cd my-book && mdbook-gen build

Library Usage:
    from mdbook_gen import Chapter, build_toc, render_markdown

    html = render_markdown("## Intro\\n\\nHello *world*.\\n")
    chapter = Chapter(id="01.00-intro", number="1.", title="Intro",
                      source="## Intro\\n", output_file="01.00-intro.html")
    contents = build_toc([chapter])
"""

from .book import discover_chapters, init_project, render_book
from .config import BookConfig, ConfigError, build_config, load_config
from .exceptions import BuildError, ChapterReadError, ProjectExistsError
from .inline import format_inline
from .models import Chapter, TocEntry, TocSection
from .page import build_page
from .renderer import classify_line, extract_headings, extract_title, render_markdown
from .slugify import generate_slug
from .toc import build_toc, collect_toc_entries

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "render_markdown",
    "format_inline",
    "generate_slug",
    "build_toc",
    "collect_toc_entries",
    "classify_line",
    "extract_headings",
    "extract_title",
    # Book assembly
    "discover_chapters",
    "build_page",
    "render_book",
    "init_project",
    # Configuration
    "BookConfig",
    "build_config",
    "load_config",
    # Data models
    "Chapter",
    "TocEntry",
    "TocSection",
    # Exceptions
    "BuildError",
    "ChapterReadError",
    "ConfigError",
    "ProjectExistsError",
    # Version
    "__version__",
]
