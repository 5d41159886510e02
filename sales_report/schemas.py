from decimal import Decimal
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class Product(BaseModel):
    """
    A catalog product. `units_sold` is a running total that only grows and is
    only touched by the aggregation step (see sales.apply_outcomes).
    """

    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    unit_price: Decimal = Field(..., ge=0, allow_inf_nan=False)
    units_sold: int = Field(default=0, ge=0)

    def add_units(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValueError(f"Units sold can only grow, got {quantity}")
        self.units_sold += quantity


class Salesperson(BaseModel):
    """A roster entry, keyed by `document_number`."""

    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    document_type: str = Field(..., min_length=1)
    document_number: str = Field(..., min_length=1)
    first_names: str = Field(..., min_length=1)
    last_names: str = Field(..., min_length=1)
    total_revenue: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator("document_type")
    @classmethod
    def _upper_document_type(cls, value: str) -> str:
        return value.upper()

    @property
    def full_name(self) -> str:
        return f"{self.first_names} {self.last_names}".strip()

    def add_revenue(self, amount: Decimal) -> None:
        if amount <= 0:
            raise ValueError(f"Revenue can only grow by positive amounts, got {amount}")
        self.total_revenue += amount


class SaleHeader(BaseModel):
    """First line of a sale file: who the sales belong to."""

    model_config = ConfigDict(str_strip_whitespace=True)

    document_type: str
    document_number: str = Field(..., min_length=1)


class SaleLine(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)


class SaleDelta(BaseModel):
    """One accepted sale line, waiting to be folded into the catalogs."""

    product_id: str
    document_number: str
    quantity: int = Field(..., gt=0)
    amount: Decimal = Field(..., ge=0)


class SaleFileOutcome(BaseModel):
    """Result of processing a single sale file. Used for reporting only."""

    file_name: str
    success: bool
    message: str
    lines_processed: int = 0
    lines_with_error: int = 0
    total_amount: Decimal = Decimal("0")
    salesperson: Salesperson | None = None
    deltas: list[SaleDelta] = Field(default_factory=list)


class RunSummary(BaseModel):
    """What a pipeline run did. Posted to the webhook when one is configured."""

    success: bool
    message: str
    files_processed: int = 0
    files_failed: int = 0
    lines_processed: int = 0
    lines_with_error: int = 0
    total_amount: Decimal = Decimal("0")
    salesperson_report: Path | None = None
    product_report: Path | None = None


class ParseResult(BaseModel, Generic[T]):
    """
    Tagged parse result: either a value or the reason the line was rejected.
    Parsers return this instead of logging, so callers decide how to report.
    """

    value: T | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def success(cls, value: T) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str) -> "ParseResult[T]":
        return cls(reason=reason)
