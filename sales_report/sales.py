import logging
from decimal import Decimal
from pathlib import Path

from . import settings
from .parsers import parse_sale_header, parse_sale_line
from .schemas import Product, SaleDelta, SaleFileOutcome, Salesperson
from .utils import format_amount, list_files, read_text_lines

logger = logging.getLogger(__name__)


def _failed(path: Path, message: str) -> SaleFileOutcome:
    logger.warning(f"  > ⚠️  {message}")
    return SaleFileOutcome(file_name=path.name, success=False, message=message)


def process_sale_file(
    path: Path,
    products: dict[str, Product],
    salespersons: dict[str, Salesperson],
) -> SaleFileOutcome:
    """
    Reads one sale file and returns its outcome. Nothing is mutated here:
    accepted lines are returned as deltas and folded later by apply_outcomes.

    File-level problems (unreadable, empty, bad header, unknown salesperson)
    give a failed outcome. Line-level problems are counted and skipped; the
    outcome is still successful once the header resolved.
    """
    try:
        lines = read_text_lines(path)
    except OSError as e:
        return _failed(path, f"Could not read {path.name}: {e}")

    if not lines:
        return _failed(path, f"Empty sale file: {path.name}")

    header = parse_sale_header(lines[0])
    if not header.ok:
        return _failed(path, f"Invalid header in {path.name}: {header.reason}")

    document_number = header.value.document_number
    salesperson = salespersons.get(document_number)
    if salesperson is None:
        return _failed(
            path, f"Salesperson '{document_number}' not found for file {path.name}"
        )

    deltas: list[SaleDelta] = []
    lines_with_error = 0
    total_amount = Decimal("0")

    for line_number, line in enumerate(lines[1:], start=2):
        parsed = parse_sale_line(line)
        if not parsed.ok:
            lines_with_error += 1
            logger.warning(
                f"    - ⚠️  {path.name}, line {line_number}: {parsed.reason} -> '{line}'"
            )
            continue

        sale = parsed.value
        product = products.get(sale.product_id)
        if product is None:
            lines_with_error += 1
            logger.warning(
                f"    - ⚠️  {path.name}, line {line_number}: "
                f"product '{sale.product_id}' not found"
            )
            continue

        amount = product.unit_price * sale.quantity
        deltas.append(
            SaleDelta(
                product_id=product.id,
                document_number=salesperson.document_number,
                quantity=sale.quantity,
                amount=amount,
            )
        )
        total_amount += amount
        logger.debug(
            f"    - Sale: {product.id} x{sale.quantity} = {format_amount(amount)}"
        )

    message = (
        f"{path.name} processed. Sales: {len(deltas)}, Errors: {lines_with_error}, "
        f"Total: {format_amount(total_amount)}"
    )
    logger.info(f"  > ✅ {message}")
    return SaleFileOutcome(
        file_name=path.name,
        success=True,
        message=message,
        lines_processed=len(deltas),
        lines_with_error=lines_with_error,
        total_amount=total_amount,
        salesperson=salesperson,
        deltas=deltas,
    )


def process_sales_directory(
    directory: Path,
    products: dict[str, Product],
    salespersons: dict[str, Salesperson],
    suffix: str = settings.SALES_FILE_SUFFIX,
) -> list[SaleFileOutcome]:
    """
    Runs process_sale_file over every sale file in `directory`. A missing
    directory yields no outcomes; the run goes on with zero sales.
    """
    if not directory.is_dir():
        logger.error(
            f"❌ Sales directory does not exist or is not a directory: {directory}"
        )
        return []

    try:
        files = list_files(directory, suffix)
    except OSError as e:
        logger.error(f"❌ Could not list sales directory {directory}: {e}")
        return []

    logger.info(f"  > Found {len(files)} sale files in {directory}")
    return [process_sale_file(path, products, salespersons) for path in files]


def apply_outcomes(
    outcomes: list[SaleFileOutcome],
    products: dict[str, Product],
    salespersons: dict[str, Salesperson],
) -> None:
    """
    Folds the deltas of every successful outcome into the catalogs. Additions
    commute, so neither file order nor line order changes the totals.
    """
    for outcome in outcomes:
        if not outcome.success:
            continue
        for delta in outcome.deltas:
            products[delta.product_id].add_units(delta.quantity)
            # Free products add units but no revenue.
            if delta.amount > 0:
                salespersons[delta.document_number].add_revenue(delta.amount)
