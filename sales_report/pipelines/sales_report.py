import logging
from decimal import Decimal
from pathlib import Path

import pandas as pd

from sales_report import catalog, reports, sales, settings
from sales_report.pipeline import DataPipeline
from sales_report.schemas import Product, RunSummary, SaleFileOutcome, Salesperson
from sales_report.utils import format_amount

logger = logging.getLogger(__name__)

Catalogs = tuple[dict[str, Product], dict[str, Salesperson]]


class SalesReportPipeline(DataPipeline):
    """
    Catalog + roster + sale files -> revenue per salesperson and units per
    product. Each run starts from the files on disk and overwrites the
    previous reports.
    """

    def __init__(
        self,
        data_dir: Path | None = None,
        sales_dir: Path | None = None,
        output_dir: Path | None = None,
        skip_rows: int = settings.CATALOG_SKIP_ROWS,
        test_mode: bool = False,
    ):
        super().__init__("sales", test_mode=test_mode)
        self.data_dir = data_dir or settings.DATA_DIR
        self.sales_dir = sales_dir or self.data_dir / settings.SALES_DIRNAME
        # Without an explicit data dir the configured output dir applies.
        self.output_dir = output_dir or (
            self.data_dir if data_dir else settings.OUTPUT_DIR
        )
        self.skip_rows = skip_rows
        self.products: dict[str, Product] = {}
        self.salespersons: dict[str, Salesperson] = {}

    def extract(self) -> Catalogs:
        logger.info("--- Loading Catalogs ---")

        products_path = self.data_dir / settings.PRODUCTS_FILENAME
        salespersons_path = self.data_dir / settings.SALESPERSONS_FILENAME
        for required in (products_path, salespersons_path):
            if not required.is_file():
                raise FileNotFoundError(f"Required file not found: {required}")

        self.products = catalog.load_products(products_path, self.skip_rows)
        self.salespersons = catalog.load_salespersons(salespersons_path, self.skip_rows)
        return self.products, self.salespersons

    def transform(self, raw_data: Catalogs) -> list[SaleFileOutcome]:
        products, salespersons = raw_data
        logger.info("\n--- Processing Sale Files ---")

        outcomes = sales.process_sales_directory(self.sales_dir, products, salespersons)
        sales.apply_outcomes(outcomes, products, salespersons)

        if outcomes:
            logger.info("\n--- Sale File Outcomes ---")
            logger.info(_outcomes_table(outcomes).to_string(index=False))
        return outcomes

    def load(self, transformed: list[SaleFileOutcome]) -> RunSummary:
        logger.info("\n--- Generating Reports ---")
        salesperson_path, product_path = reports.generate_reports(
            self.salespersons, self.products, self.output_dir
        )

        succeeded = [o for o in transformed if o.success]
        summary = RunSummary(
            success=True,
            message=(
                f"{len(succeeded)} files processed correctly, "
                f"{len(transformed) - len(succeeded)} with errors."
            ),
            files_processed=len(succeeded),
            files_failed=len(transformed) - len(succeeded),
            lines_processed=sum(o.lines_processed for o in succeeded),
            lines_with_error=sum(o.lines_with_error for o in succeeded),
            total_amount=sum((o.total_amount for o in succeeded), Decimal("0")),
            salesperson_report=salesperson_path,
            product_report=product_path,
        )
        logger.info(f"\n📊 Summary: {summary.message}")
        logger.info(
            f"   Lines: {summary.lines_processed} processed, "
            f"{summary.lines_with_error} with errors. "
            f"Total sold: {format_amount(summary.total_amount)}"
        )
        return summary


def _outcomes_table(outcomes: list[SaleFileOutcome]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "File": o.file_name,
                "OK": "✅" if o.success else "❌",
                "Salesperson": o.salesperson.full_name if o.salesperson else "-",
                "Lines": o.lines_processed,
                "Errors": o.lines_with_error,
                "Total": format_amount(o.total_amount),
            }
            for o in outcomes
        ]
    )


def run_pipeline(
    data_dir: Path | None = None,
    sales_dir: Path | None = None,
    output_dir: Path | None = None,
    test_mode: bool = False,
) -> RunSummary:
    """Runs the sales report pipeline once and returns its summary."""
    pipeline = SalesReportPipeline(
        data_dir=data_dir,
        sales_dir=sales_dir,
        output_dir=output_dir,
        test_mode=test_mode,
    )
    return pipeline.run()
