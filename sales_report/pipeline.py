import logging
from abc import ABC, abstractmethod
from typing import Any

from . import reports
from .schemas import RunSummary

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for report pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern.

    extract() fails the run by raising OSError (missing or unreadable inputs);
    load() does the same when outputs cannot be written. Problems inside the
    data degrade instead of aborting.
    """

    def __init__(self, report_type: str, test_mode: bool = False):
        self.report_type = report_type
        self.test_mode = test_mode

    def run(self) -> RunSummary:
        """
        Orchestrates the pipeline execution. Never raises for bad input data;
        the returned summary says whether the run succeeded and why not.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        try:
            raw_data = self.extract()
        except OSError as e:
            logger.error(f"❌ {self.report_type} aborted: {e}")
            summary = RunSummary(success=False, message=str(e))
            self.notify(summary)
            return summary

        # --- 2. TRANSFORM ---
        transformed = self.transform(raw_data)

        # --- 3. LOAD ---
        try:
            summary = self.load(transformed)
        except OSError as e:
            logger.error(f"❌ Could not write {self.report_type} outputs: {e}")
            summary = RunSummary(success=False, message=str(e))
        self.notify(summary)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return summary

    @abstractmethod
    def extract(self) -> Any:
        """Loads the inputs. Raises OSError when they cannot be read at all."""

    @abstractmethod
    def transform(self, raw_data: Any) -> Any:
        """Processes and aggregates the extracted inputs."""

    @abstractmethod
    def load(self, transformed: Any) -> RunSummary:
        """Writes outputs and returns the run summary."""

    def notify(self, summary: RunSummary) -> None:
        if self.test_mode:
            logger.info("🧪 Test Mode: Skipping webhook post.")
            return
        reports.post_to_webhook(summary)
