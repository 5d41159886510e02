import logging
from decimal import Decimal
from pathlib import Path

from . import settings

logger = logging.getLogger(__name__)


def read_text_lines(file_path: Path) -> list[str]:
    """
    Reads a text file into a list of lines (without line endings), with an
    encoding fallback:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which accepts any byte sequence.

    FileNotFoundError and other OSErrors propagate; callers decide whether a
    missing file is fatal.
    """
    try:
        return file_path.read_text(encoding="utf-8-sig").splitlines()
    except UnicodeDecodeError:
        logger.info(
            f"INFO: UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        return file_path.read_text(encoding="latin-1").splitlines()


def split_fields(line: str, separator: str = settings.FIELD_SEPARATOR) -> list[str]:
    """Splits a delimited line and trims every field."""
    return [field.strip() for field in line.split(separator)]


def list_files(directory: Path, suffix: str = settings.SALES_FILE_SUFFIX) -> list[Path]:
    """Regular files in `directory` whose suffix matches (case-insensitive)."""
    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() == suffix.lower()
    )


def format_amount(value: Decimal | float) -> str:
    """Formats a money or price value with two decimals, e.g. '30.00'."""
    return f"{value:.2f}"
