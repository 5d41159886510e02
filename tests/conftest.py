from decimal import Decimal
from pathlib import Path

import pytest

from sales_report.schemas import Product, Salesperson


def _write_lines(path: Path, *lines: str, encoding: str = "utf-8") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{line}\n" for line in lines), encoding=encoding)
    return path


@pytest.fixture
def write_lines():
    """Writes each line plus a newline to a file, creating parent dirs."""
    return _write_lines


@pytest.fixture
def products() -> dict[str, Product]:
    return {
        "P001": Product(id="P001", name="Widget", unit_price=Decimal("10.00")),
        "P002": Product(id="P002", name="Gadget", unit_price=Decimal("2.50")),
        "P003": Product(id="P003", name="Sample", unit_price=Decimal("0")),
    }


@pytest.fixture
def salespersons() -> dict[str, Salesperson]:
    return {
        "123": Salesperson(
            document_type="CC",
            document_number="123",
            first_names="Ana",
            last_names="Pérez",
        ),
        "456": Salesperson(
            document_type="CE",
            document_number="456",
            first_names="Luis",
            last_names="Gómez",
        ),
    }


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """A data directory with the minimal catalog, roster and one sale file."""
    _write_lines(tmp_path / "productos.csv", "P001;Widget;10.00")
    _write_lines(tmp_path / "vendedores.csv", "CC;123;Ana;Pérez")
    _write_lines(tmp_path / "ventas" / "ventas_CC_123.csv", "CC;123", "P001;3")
    return tmp_path
