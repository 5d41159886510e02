import logging
from pathlib import Path

import pandas as pd
import requests

from . import settings
from .schemas import Product, RunSummary, Salesperson
from .utils import format_amount

logger = logging.getLogger(__name__)


def rank_salespersons(salespersons: dict[str, Salesperson]) -> list[Salesperson]:
    """Highest revenue first; equal revenue falls back to document number."""
    return sorted(
        salespersons.values(),
        key=lambda s: (-s.total_revenue, s.document_number),
    )


def rank_products(products: dict[str, Product]) -> list[Product]:
    """Most units sold first; equal units fall back to product id."""
    return sorted(products.values(), key=lambda p: (-p.units_sold, p.id))


def build_salesperson_report(salespersons: dict[str, Salesperson]) -> pd.DataFrame:
    rows = [
        {
            "Vendedor": s.full_name,
            "TipoDoc": s.document_type,
            "Documento": s.document_number,
            "VentasTotales": format_amount(s.total_revenue),
        }
        for s in rank_salespersons(salespersons)
    ]
    return pd.DataFrame(rows, columns=settings.SALESPERSON_REPORT_COLUMNS)


def build_product_report(products: dict[str, Product]) -> pd.DataFrame:
    rows = [
        {
            "Producto": p.name,
            "Precio": format_amount(p.unit_price),
            "CantidadVendida": p.units_sold,
        }
        for p in rank_products(products)
    ]
    return pd.DataFrame(rows, columns=settings.PRODUCT_REPORT_COLUMNS)


def save_report(df: pd.DataFrame, path: Path) -> Path:
    """Writes a report as `;`-separated UTF-8, replacing any previous run's file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(
        path,
        sep=settings.FIELD_SEPARATOR,
        index=False,
        encoding="utf-8",
        lineterminator="\n",
    )
    logger.info(f"✅ Report saved to: {path}")
    return path


def generate_reports(
    salespersons: dict[str, Salesperson],
    products: dict[str, Product],
    output_dir: Path = settings.OUTPUT_DIR,
) -> tuple[Path, Path]:
    """
    Writes both ranked reports to `output_dir` and logs them as tables.
    Returns the (salesperson report, product report) paths.
    """
    salesperson_df = build_salesperson_report(salespersons)
    product_df = build_product_report(products)

    salesperson_path = save_report(
        salesperson_df, output_dir / settings.SALESPERSON_REPORT_FILENAME
    )
    product_path = save_report(product_df, output_dir / settings.PRODUCT_REPORT_FILENAME)

    logger.info("\n📊 --- Salesperson Report ---")
    logger.info(_as_table(salesperson_df))
    logger.info("\n📦 --- Product Report ---")
    logger.info(_as_table(product_df))

    return salesperson_path, product_path


def _as_table(df: pd.DataFrame) -> str:
    if df.empty:
        return "(no rows)"
    return df.to_string(index=False)


def post_to_webhook(summary: RunSummary, webhook_url: str | None = None):
    """
    Posts the run summary to the webhook. Does nothing when no URL is set.
    Network failures are logged, never raised: the reports are already on disk.
    """
    webhook_url = webhook_url or settings.WEBHOOK_URL
    if not webhook_url:
        logger.info("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return

    logger.info(f"🚀 Posting run summary to webhook: {webhook_url}")
    payload = {"reportType": "sales_report", "summary": summary.model_dump(mode="json")}

    try:
        response = requests.post(webhook_url, json=payload, timeout=15)
        response.raise_for_status()
        logger.info("✅ Run summary successfully posted to webhook.")
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
