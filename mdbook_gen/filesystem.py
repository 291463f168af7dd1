"""Filesystem helpers for mdbook-gen."""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from importlib import resources
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, IMAGE_DIR, STYLESHEET_PATH
from .exceptions import ChapterReadError

MAX_FILE_SIZE_ENV_VAR = "MDBOOK_GEN_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed chapter size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["MDBOOK_GEN_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size()
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a regular file.

    Raises:
        IOError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("book/01-intro.md")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def read_chapter(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Read a chapter source file.

    Args:
        filepath: Path to the Markdown file.
        max_size: Largest accepted size in bytes.

    Returns:
        str: File content.

    Raises:
        ChapterReadError: If the file is not a readable regular file, exceeds
            `max_size`, or is not valid UTF-8.
    """
    try:
        enforce_file_size(collect_file_stat(filepath), max_size, filepath)
        with safe_read(filepath) as file:
            return file.read()
    except UnicodeDecodeError as error:
        raise ChapterReadError(filepath, f"invalid UTF-8 sequence ({error})") from error
    except IOError as error:
        raise ChapterReadError(filepath, str(error)) from error


def write_atomic(filepath: Path, text: str):
    """Write text to a file through a temporary file and an atomic rename.

    Raises:
        IOError: If the temporary file cannot be written or moved in place.
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, filepath)
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass


def ensure_output_dirs(out_dir: Path):
    """Create the output directory with its stylesheet and image folders."""
    out_dir.mkdir(parents=True, exist_ok=True)
    out_dir.joinpath(*STYLESHEET_PATH).parent.mkdir(parents=True, exist_ok=True)
    out_dir.joinpath(*IMAGE_DIR).mkdir(parents=True, exist_ok=True)


def packaged_template(name: str):
    """Return a traversable for a file under the packaged ``templates`` folder."""
    return resources.files("mdbook_gen").joinpath("templates", name)


def copy_stylesheet(root: Path, out_dir: Path) -> Path:
    """Copy the book stylesheet into the output directory.

    A project stylesheet at ``assets/css/main.css`` takes precedence over the
    packaged default.

    Returns:
        Path: Destination of the copied stylesheet.
    """
    destination = out_dir.joinpath(*STYLESHEET_PATH)
    local_css = root.joinpath(*STYLESHEET_PATH)
    if local_css.is_file():
        shutil.copyfile(local_css, destination)
    else:
        write_atomic(destination, packaged_template("main.css").read_text(encoding="UTF-8"))
    return destination
