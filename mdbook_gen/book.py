"""Book building: chapter discovery, rendering, and output."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from .config import BookConfig, build_config
from .constants import (
    BOOK_DIR,
    CONFIG_FILE,
    CONTENTS_ID,
    CONTENTS_SOURCE,
    CONTENTS_TITLE,
    FRONT_MATTER_ID,
    FRONT_MATTER_SOURCE,
    FRONT_MATTER_TITLE,
    STYLESHEET_PATH,
    TOP_CHAPTER_PATTERN,
)
from .exceptions import ProjectExistsError
from .filesystem import (
    copy_stylesheet,
    ensure_output_dirs,
    get_max_file_size,
    packaged_template,
    read_chapter,
    write_atomic,
)
from .models import Chapter
from .page import build_page
from .renderer import extract_title, render_markdown
from .toc import build_toc


def discover_chapters(
    root: Path, config: BookConfig, max_file_size: int | None = None
) -> list[Chapter]:
    """Read and number every chapter under ``<root>/book``.

    Files are taken in name order. ``NN-name.md`` starts top-level chapter
    ``N.`` written to ``NN.00-name.html``; any other file becomes the next
    sub-chapter ``N.M.`` of the chapter before it and keeps its own stem.
    The front matter and contents files get fixed titles and output names.

    Args:
        root: Project directory.
        config: Book configuration, used for chapter categories.
        max_file_size: Largest accepted chapter size in bytes; defaults to the
            environment-aware limit.

    Returns:
        list[Chapter]: Chapters in reading order.

    Raises:
        ChapterReadError: If a chapter file cannot be read.
        ValueError: If the file size limit from the environment is invalid.
    """
    if max_file_size is None:
        max_file_size = get_max_file_size()

    chapters: list[Chapter] = []
    chapter_number = 0
    sub_chapter = 0

    for path in sorted((root / BOOK_DIR).glob("*.md")):
        source = read_chapter(path, max_file_size)
        filename = path.name

        if filename == FRONT_MATTER_SOURCE:
            chapters.append(
                Chapter(
                    id=FRONT_MATTER_ID,
                    title=FRONT_MATTER_TITLE,
                    source=source,
                    input_file=filename,
                    output_file=f"{FRONT_MATTER_ID}.html",
                    is_front=True,
                )
            )
            continue

        if filename == CONTENTS_SOURCE:
            chapters.append(
                Chapter(
                    id=CONTENTS_ID,
                    title=CONTENTS_TITLE,
                    source=source,
                    input_file=filename,
                    output_file=f"{CONTENTS_ID}.html",
                    is_contents=True,
                )
            )
            continue

        top_match = TOP_CHAPTER_PATTERN.match(filename)
        category = ""
        if top_match:
            chapter_number += 1
            sub_chapter = 0
            number = f"{chapter_number}."
            output_file = f"{chapter_number:02d}.00-{top_match.group(2)}.html"
            category = config.categories.get(chapter_number, "")
        else:
            sub_chapter += 1
            number = f"{chapter_number}.{sub_chapter}."
            output_file = f"{path.stem}.html"

        chapters.append(
            Chapter(
                id=output_file.removesuffix(".html"),
                number=number,
                title=extract_title(source),
                source=source,
                input_file=filename,
                output_file=output_file,
                category=category,
            )
        )

    return chapters


def render_chapter(chapter: Chapter, chapters: Sequence[Chapter]) -> str:
    """Render the HTML fragment for one chapter.

    The contents chapter ignores its own source and lists the other chapters.
    """
    if chapter.is_contents:
        return build_toc(chapters)
    return render_markdown(chapter.source)


def neighbours(chapters: Sequence[Chapter], index: int) -> tuple[str | None, str | None]:
    """Return the output files of the chapters before and after `index`."""
    prev_file = chapters[index - 1].output_file if index > 0 else None
    next_file = chapters[index + 1].output_file if index < len(chapters) - 1 else None
    return prev_file, next_file


def resolve_output_dir(root: Path, config: BookConfig) -> Path:
    """Resolve the configured output directory against the project root."""
    out_dir = Path(config.output_dir).expanduser()
    if not out_dir.is_absolute():
        out_dir = root / out_dir
    return out_dir


def render_book(
    root: Path,
    output_dir: str | None = None,
    warn: Callable[[str], None] | None = None,
) -> Path:
    """Build the whole book into static HTML pages.

    Args:
        root: Project directory containing ``book.toml`` and ``book/``.
        output_dir: Overrides the configured output directory.
        warn: Optional callback for non-fatal warnings.

    Returns:
        Path: The directory the book was written to.

    Raises:
        ConfigError: If ``book.toml`` is missing or invalid.
        ChapterReadError: If a chapter cannot be read.
        IOError: If output files cannot be written.

    Examples:
        out_dir = render_book(Path("my-book"), output_dir="/tmp/book")
    """
    config = build_config(root, output_dir=output_dir)
    chapters = discover_chapters(root, config)
    if not chapters and warn is not None:
        warn(f"Warning: no chapters found in {root / BOOK_DIR}")

    out_dir = resolve_output_dir(root, config)
    ensure_output_dirs(out_dir)
    copy_stylesheet(root, out_dir)

    for index, chapter in enumerate(chapters):
        content = render_chapter(chapter, chapters)
        prev_file, next_file = neighbours(chapters, index)
        page = build_page(chapter, content, prev_file, next_file, config)
        write_atomic(out_dir / chapter.output_file, page)
        if chapter.is_front:
            write_atomic(out_dir / "index.html", page)

    return out_dir


def init_project(name: str, base_dir: Path) -> Path:
    """Create a new book project from the packaged templates.

    Args:
        name: Directory name of the new project.
        base_dir: Directory the project is created in.

    Returns:
        Path: The created project directory.

    Raises:
        ProjectExistsError: If the target directory already exists.
    """
    project = base_dir / name
    if project.exists():
        raise ProjectExistsError(project)

    (project / BOOK_DIR).mkdir(parents=True)
    project.joinpath(*STYLESHEET_PATH).parent.mkdir(parents=True)

    write_atomic(project / CONFIG_FILE, packaged_template(CONFIG_FILE).read_text(encoding="UTF-8"))
    for sample in sorted(packaged_template("sample").iterdir(), key=lambda entry: entry.name):
        if sample.name.endswith(".md"):
            write_atomic(project / BOOK_DIR / sample.name, sample.read_text(encoding="UTF-8"))
    write_atomic(
        project.joinpath(*STYLESHEET_PATH),
        packaged_template("main.css").read_text(encoding="UTF-8"),
    )
    return project
