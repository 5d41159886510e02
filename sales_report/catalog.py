import logging
from pathlib import Path
from typing import Callable, TypeVar

from . import settings
from .parsers import parse_product_line, parse_salesperson_line
from .schemas import ParseResult, Product, Salesperson
from .utils import read_text_lines

logger = logging.getLogger(__name__)

R = TypeVar("R")


def load_catalog(
    path: Path,
    parser: Callable[[str], ParseResult[R]],
    key: Callable[[R], str],
    skip_rows: int = settings.CATALOG_SKIP_ROWS,
) -> dict[str, R]:
    """
    Loads one record per line into a dict keyed by `key(record)`.

    - Blank lines are skipped silently.
    - Lines the parser rejects are logged once and dropped.
    - On a duplicate key the first record wins and the duplicate is logged.

    Raises FileNotFoundError (or another OSError) when the file cannot be
    read. Without a catalog nothing downstream can run, so this is fatal.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    logger.info(f"  > Loading {path.name}")
    records: dict[str, R] = {}
    rejected = 0
    duplicates = 0

    for line_number, line in enumerate(read_text_lines(path), start=1):
        if line_number <= skip_rows or not line.strip():
            continue

        result = parser(line)
        if not result.ok:
            rejected += 1
            logger.warning(
                f"    - ⚠️  {path.name}, line {line_number}: {result.reason} -> '{line}'"
            )
            continue

        record = result.value
        record_key = key(record)
        if record_key in records:
            duplicates += 1
            logger.warning(
                f"    - ⚠️  {path.name}, line {line_number}: duplicate key '{record_key}'. "
                "Keeping the first record."
            )
            continue
        records[record_key] = record

    logger.info(
        f"  > 📊 {path.name}: {len(records)} loaded, {rejected} rejected, "
        f"{duplicates} duplicates"
    )
    return records


def load_products(
    path: Path, skip_rows: int = settings.CATALOG_SKIP_ROWS
) -> dict[str, Product]:
    return load_catalog(path, parse_product_line, lambda p: p.id, skip_rows)


def load_salespersons(
    path: Path, skip_rows: int = settings.CATALOG_SKIP_ROWS
) -> dict[str, Salesperson]:
    return load_catalog(
        path, parse_salesperson_line, lambda s: s.document_number, skip_rows
    )
