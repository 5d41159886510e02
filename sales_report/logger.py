import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from . import settings

LOG_FILENAME = "sales_report.log"


def setup_logger(
    name: str | None = None,
    verbose: bool = False,
    log_dir: Path | None = None,
) -> logging.Logger:
    """
    Configures console and rotating-file output for a run.

    The console shows INFO and up (DEBUG with `verbose`): loading stats, one
    warning per rejected line or file, and the report tables. The file under
    settings.LOG_DIR always records DEBUG, so every accepted sale line can be
    traced after the fact.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Prevent adding handlers multiple times if logger is already set up
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    log_dir = log_dir or settings.LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_dir / LOG_FILENAME,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)

    return logger
