import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def book_project(tmp_path: Path) -> Path:
    """Creates a small book project with front matter, contents and two chapters."""
    (tmp_path / "book.toml").write_text(
        textwrap.dedent(
            """
            title = "Go 并发"
            author = "Alice"
            copyright = "© Alice"

            [categories]
            1 = "基础核心"
            """
        ).lstrip(),
        encoding="utf-8",
    )
    book = tmp_path / "book"
    book.mkdir()
    (book / "00.00-frontmatter.md").write_text("# Preface\n\nHello.\n", encoding="utf-8")
    (book / "00.01-contents.md").write_text("ignored\n", encoding="utf-8")
    (book / "01-basics.md").write_text(
        "# 第 1 章：基础\n\n## 1.1 Goroutine\n\ntext\n\n## 1.2 Channel\n", encoding="utf-8"
    )
    (book / "01.01-select.md").write_text("# Select\n\n## 用法\n", encoding="utf-8")
    (book / "02-sync.md").write_text("# Sync\n\n- Mutex\n- WaitGroup\n", encoding="utf-8")
    return tmp_path
