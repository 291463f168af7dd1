from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from mdbook_gen.config import (
    BookConfig,
    ConfigError,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_book_toml(base: Path, body: str) -> Path:
    path = base / "book.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_book_toml(tmp_path: Path):
    _write_book_toml(
        tmp_path,
        """
        title = "Go 并发"
        author = "Alice"
        copyright = "© 2024 Alice"
        language = "en"
        output_dir = "dist"

        [categories]
        1 = "基础核心"
        3 = "进阶"
        """,
    )

    config = load_config(tmp_path)

    assert config == BookConfig(
        title="Go 并发",
        author="Alice",
        copyright="© 2024 Alice",
        language="en",
        output_dir="dist",
        categories={1: "基础核心", 3: "进阶"},
    )


def test_missing_keys_use_defaults(tmp_path: Path):
    _write_book_toml(tmp_path, 'title = "Only a title"\n')

    config = load_config(tmp_path)

    assert config.title == "Only a title"
    assert config.output_dir == "output.html"
    assert config.language == "zh-CN"
    assert config.categories == {}


def test_missing_book_toml_raises(tmp_path: Path):
    with pytest.raises(ConfigError, match="book.toml"):
        load_config(tmp_path)


def test_yaml_config_is_not_read(tmp_path: Path):
    (tmp_path / "book.yaml").write_text("title: Old Book\n", encoding="utf-8")

    with pytest.raises(ConfigError, match=r"Cannot read book\.toml"):
        load_config(tmp_path)


def test_invalid_toml_raises(tmp_path: Path):
    _write_book_toml(tmp_path, "title = \n")

    with pytest.raises(ConfigError, match="Invalid book.toml"):
        load_config(tmp_path)


def test_unknown_keys_raise(tmp_path: Path):
    _write_book_toml(tmp_path, 'title = "x"\nthemes = "dark"\n')

    with pytest.raises(ConfigError, match="themes"):
        load_config(tmp_path)


def test_non_numeric_category_raises(tmp_path: Path):
    _write_book_toml(
        tmp_path,
        """
        [categories]
        one = "基础"
        """,
    )

    with pytest.raises(ConfigError, match="not a chapter number"):
        load_config(tmp_path)


def test_categories_must_be_a_table(tmp_path: Path):
    _write_book_toml(tmp_path, 'categories = "basics"\n')

    with pytest.raises(ConfigError, match="categories"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "config",
    [
        BookConfig(title=1),
        BookConfig(output_dir=""),
        BookConfig(categories={0: "zero"}),
        BookConfig(categories={1: 2}),
        BookConfig(categories={True: "bool"}),
    ],
)
def test_validate_config_rejects_invalid_values(config: BookConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_validate_config_accepts_defaults():
    validate_config(BookConfig())


def test_apply_overrides_ignores_none():
    config = BookConfig(output_dir="dist")

    assert apply_overrides(config, output_dir=None) is config
    assert apply_overrides(config, output_dir="/tmp/book").output_dir == "/tmp/book"


def test_apply_overrides_rejects_unknown_fields():
    with pytest.raises(TypeError):
        apply_overrides(BookConfig(), theme="dark")


def test_build_config_applies_overrides_and_validates(tmp_path: Path):
    _write_book_toml(tmp_path, 'title = "Book"\noutput_dir = "dist"\n')

    assert build_config(tmp_path, output_dir="site").output_dir == "site"
    with pytest.raises(ConfigError):
        build_config(tmp_path, output_dir="")
