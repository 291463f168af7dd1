from __future__ import annotations

from pathlib import Path

from mdbook_gen.cli import cli


def test_cli_init_creates_project(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["init", "my-book"])

    assert result.exit_code == 0, result.output
    assert "Creating new book project: my-book" in result.output
    assert (tmp_path / "my-book" / "book.toml").is_file()
    assert (tmp_path / "my-book" / "book" / "01-introduction.md").is_file()


def test_cli_init_refuses_existing_directory(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "my-book").mkdir()

    result = cli_runner.invoke(cli, ["init", "my-book"])

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_cli_build_writes_book(cli_runner, book_project: Path):
    result = cli_runner.invoke(cli, ["build", "--root", str(book_project)])

    assert result.exit_code == 0, result.output
    assert "Book written to" in result.output
    assert (book_project / "output.html" / "index.html").is_file()


def test_cli_build_uses_current_directory(cli_runner, book_project: Path, monkeypatch):
    monkeypatch.chdir(book_project)

    result = cli_runner.invoke(cli, ["build", "--output", "site"])

    assert result.exit_code == 0, result.output
    assert (book_project / "site" / "00.01-contents.html").is_file()


def test_cli_build_reports_missing_config(cli_runner, tmp_path: Path):
    result = cli_runner.invoke(cli, ["build", "--root", str(tmp_path)])

    assert result.exit_code == 2
    assert "book.toml" in result.output


def test_cli_build_reports_invalid_size_limit(cli_runner, book_project: Path, monkeypatch):
    monkeypatch.setenv("MDBOOK_GEN_MAX_FILE_SIZE", "nope")

    result = cli_runner.invoke(cli, ["build", "--root", str(book_project)])

    assert result.exit_code == 1
    assert "MDBOOK_GEN_MAX_FILE_SIZE" in result.output


def test_cli_build_reports_oversized_chapter(cli_runner, book_project: Path, monkeypatch):
    monkeypatch.setenv("MDBOOK_GEN_MAX_FILE_SIZE", "5")

    result = cli_runner.invoke(cli, ["build", "--root", str(book_project)])

    assert result.exit_code == 1
    assert "Cannot read chapter" in result.output


def test_cli_build_warns_about_empty_book(cli_runner, tmp_path: Path):
    (tmp_path / "book.toml").write_text('title = "Empty"\n', encoding="utf-8")
    (tmp_path / "book").mkdir()

    result = cli_runner.invoke(cli, ["build", "--root", str(tmp_path)])

    assert result.exit_code == 0
    assert "no chapters found" in result.output
