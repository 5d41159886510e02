"""
Synthetic input data: a product catalog, a salesperson roster and one sale
file per salesperson, in the formats the report pipeline reads.

All randomness comes from the `random.Random` instance passed in, so a fixed
seed reproduces the same files byte for byte.
"""

import logging
import random
from decimal import Decimal
from pathlib import Path

from . import settings
from .schemas import Product, Salesperson

logger = logging.getLogger(__name__)

PRODUCT_PREFIX = "P"
MIN_PRICE = 1_000
MAX_PRICE = 500_000


def _write_lines(path: Path, lines: list[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for line in lines:
            f.write(line + "\n")


def _one_or_two(names: list[str], rng: random.Random) -> str:
    first = rng.choice(names)
    return f"{first} {rng.choice(names)}" if rng.random() < 0.5 else first


def create_products_file(count: int, rng: random.Random, path: Path) -> list[Product]:
    """Writes `count` products (at least one) as `id;name;price`."""
    count = max(count, 1)
    bases = settings.PRODUCT_NAME_BASES
    products = [
        Product(
            id=f"{PRODUCT_PREFIX}{i:04d}",
            name=f"{bases[i % len(bases)]} {100 + i}",
            unit_price=Decimal(rng.randrange(MIN_PRICE, MAX_PRICE)),
        )
        for i in range(1, count + 1)
    ]
    _write_lines(
        path,
        [
            settings.FIELD_SEPARATOR.join([p.id, p.name, str(p.unit_price)])
            for p in products
        ],
    )
    logger.info(f"✅ {len(products)} products written to {path}")
    return products


def create_salespersons_file(
    count: int, rng: random.Random, path: Path
) -> list[Salesperson]:
    """Writes `count` salespersons (at least one) with unique document numbers."""
    count = max(count, 1)
    used: set[int] = set()
    salespersons = []
    for _ in range(count):
        document_type = rng.choice(settings.DOCUMENT_TYPES)
        number = rng.randrange(10_000_000, 910_000_000)
        while number in used:
            number = rng.randrange(10_000_000, 910_000_000)
        used.add(number)
        salespersons.append(
            Salesperson(
                document_type=document_type,
                document_number=str(number),
                first_names=_one_or_two(settings.FIRST_NAMES, rng),
                last_names=_one_or_two(settings.LAST_NAMES, rng),
            )
        )

    _write_lines(
        path,
        [
            settings.FIELD_SEPARATOR.join(
                [s.document_type, s.document_number, s.first_names, s.last_names]
            )
            for s in salespersons
        ],
    )
    logger.info(f"✅ {len(salespersons)} salespersons written to {path}")
    return salespersons


def create_sales_file(
    sales_count: int,
    salesperson: Salesperson,
    catalog: list[Product],
    rng: random.Random,
    sales_dir: Path,
    min_qty: int = settings.MIN_QTY_PER_SALE,
    max_qty: int = settings.MAX_QTY_PER_SALE,
) -> Path:
    """
    Writes `ventas_<type>_<number>.csv`: a `type;number` header followed by
    `productId;quantity;` lines picked at random from `catalog`.
    """
    if not catalog:
        raise ValueError("Cannot generate sales without a product catalog")

    sales_count = max(sales_count, 1)
    low, high = sorted((min_qty, max_qty))
    sep = settings.FIELD_SEPARATOR

    lines = [f"{salesperson.document_type}{sep}{salesperson.document_number}"]
    for _ in range(sales_count):
        product = rng.choice(catalog)
        lines.append(f"{product.id}{sep}{rng.randint(low, high)}{sep}")

    path = (
        sales_dir
        / f"ventas_{salesperson.document_type}_{salesperson.document_number}.csv"
    )
    _write_lines(path, lines)
    return path


def generate_dataset(
    data_dir: Path = settings.DATA_DIR,
    products_count: int = settings.GENERATOR_PRODUCTS_COUNT,
    salespersons_count: int = settings.GENERATOR_SALESPERSONS_COUNT,
    seed: int = settings.GENERATOR_SEED,
    min_sales: int = settings.MIN_SALES_PER_FILE,
    max_sales: int = settings.MAX_SALES_PER_FILE,
) -> tuple[list[Product], list[Salesperson]]:
    """Generates the catalog, the roster and every sale file under `data_dir`."""
    rng = random.Random(seed)
    sales_dir = data_dir / settings.SALES_DIRNAME
    sales_dir.mkdir(parents=True, exist_ok=True)

    products = create_products_file(
        products_count, rng, data_dir / settings.PRODUCTS_FILENAME
    )
    salespersons = create_salespersons_file(
        salespersons_count, rng, data_dir / settings.SALESPERSONS_FILENAME
    )

    low, high = sorted((min_sales, max_sales))
    for salesperson in salespersons:
        create_sales_file(rng.randint(low, high), salesperson, products, rng, sales_dir)

    logger.info(f"✅ {len(salespersons)} sale files written to {sales_dir}")
    return products, salespersons
