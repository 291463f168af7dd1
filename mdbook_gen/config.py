"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
import tomllib

from .constants import CONFIG_FILE, DEFAULT_OUTPUT_DIR


@dataclass(frozen=True)
class BookConfig:
    """Book metadata and build settings, read from ``book.toml``.

    Attributes:
        title: Book title shown in the breadcrumb and page titles.
        author: Value of the ``author`` meta tag.
        copyright: Value of the ``copyright`` meta tag.
        language: ``lang`` attribute of generated pages.
        output_dir: Output directory, relative to the project root unless
            absolute.
        categories: Category name per top-level chapter number.

    Examples:
        BookConfig(title="Go 并发", categories={1: "基础核心"})
    """

    title: str = ""
    author: str = ""
    copyright: str = ""
    language: str = "zh-CN"
    output_dir: str = DEFAULT_OUTPUT_DIR
    categories: dict[int, str] = field(default_factory=dict)


class ConfigError(ValueError):
    """Exception raised when configuration is missing or invalid.

    Examples:
        raise ConfigError("`title` must be a string")
    """


def load_config(root: Path) -> BookConfig:
    """Load ``book.toml`` from a project root.

    Category keys are TOML strings and are converted to chapter numbers.

    Args:
        root: Project directory holding ``book.toml``.

    Returns:
        BookConfig: Loaded configuration with defaults for missing keys.

    Raises:
        ConfigError: If the file is missing, cannot be decoded, or contains
            unsupported keys or category numbers.

    Examples:
        load_config(Path("my-book"))
    """
    config_file = root / CONFIG_FILE
    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except FileNotFoundError as error:
        raise ConfigError(f"Cannot read {CONFIG_FILE} ({config_file})") from error
    except OSError as error:
        raise ConfigError(f"Cannot read {CONFIG_FILE} ({config_file}): {error}") from error
    except tomllib.TOMLDecodeError as error:
        raise ConfigError(f"Invalid {CONFIG_FILE} ({config_file}): {error}") from error

    known = {config_field.name for config_field in fields(BookConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unsupported keys in {config_file}: {', '.join(unknown)}")

    if "categories" in data:
        data["categories"] = _parse_categories(data["categories"], config_file)

    return BookConfig(**data)


def _parse_categories(raw: object, config_file: Path) -> dict[int, str]:
    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid `[categories]` settings in {config_file}")

    categories = {}
    for key, value in raw.items():
        try:
            number = int(key)
        except ValueError as error:
            raise ConfigError(
                f"Category key {key!r} in {config_file} is not a chapter number"
            ) from error
        categories[number] = value
    return categories


def validate_config(config: BookConfig) -> None:
    """Validate a `BookConfig` instance.

    Raises:
        ConfigError: If a text field is not a string, the output directory is
            empty, or categories are not positive numbers mapped to strings.
    """
    for name in ("title", "author", "copyright", "language", "output_dir"):
        if not isinstance(getattr(config, name), str):
            raise ConfigError(f"`{name}` must be a string")

    if not config.output_dir:
        raise ConfigError("`output_dir` must not be empty")

    for number, name in config.categories.items():
        if isinstance(number, bool) or not isinstance(number, int) or number <= 0:
            raise ConfigError("category keys must be positive chapter numbers")
        if not isinstance(name, str):
            raise ConfigError(f"category {number} must be a string")


def apply_overrides(config: BookConfig, **overrides: object) -> BookConfig:
    """Apply override values to a `BookConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by field name; None values are
            ignored.

    Returns:
        BookConfig: New configuration, or `config` itself when nothing changes.

    Raises:
        TypeError: If an override name is not a `BookConfig` field.

    Examples:
        updated = apply_overrides(config, output_dir="/tmp/book")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(root: Path, **overrides: object) -> BookConfig:
    """Load, override, and validate configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), output_dir="dist")
    """
    config = load_config(root)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
