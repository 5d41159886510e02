"""
Line parsers for the catalog, roster and sale files.

Every parser takes one raw text line and returns a ParseResult. Parsers never
log and never raise: the loaders turn a failure reason into one diagnostic.
"""

import re

from pydantic import ValidationError

from . import settings
from .schemas import ParseResult, Product, SaleHeader, SaleLine, Salesperson
from .utils import split_fields

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def _describe(exc: ValidationError) -> str:
    """Collapses a pydantic ValidationError into a one-line reason."""
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def parse_product_line(
    line: str, separator: str = settings.FIELD_SEPARATOR
) -> ParseResult[Product]:
    """Parses `id;name;price` into a Product."""
    fields = split_fields(line, separator)
    if len(fields) < 3:
        return ParseResult.failure(f"expected 3 fields, found {len(fields)}")

    product_id, name, price = fields[:3]
    try:
        return ParseResult.success(
            Product(id=product_id, name=name, unit_price=price)  # type: ignore[arg-type]
        )
    except ValidationError as e:
        return ParseResult.failure(_describe(e))


def parse_salesperson_line(
    line: str, separator: str = settings.FIELD_SEPARATOR
) -> ParseResult[Salesperson]:
    """Parses `documentType;documentNumber;firstNames;lastNames` into a Salesperson."""
    fields = split_fields(line, separator)
    if len(fields) < 4:
        return ParseResult.failure(f"expected 4 fields, found {len(fields)}")

    # A leftover header row would otherwise load as a salesperson named "nombres".
    if [field.lower() for field in fields[:4]] == settings.SALESPERSON_HEADER_FIELDS:
        return ParseResult.failure("header row found where data was expected")

    document_type, document_number, first_names, last_names = fields[:4]
    try:
        return ParseResult.success(
            Salesperson(
                document_type=document_type,
                document_number=document_number,
                first_names=first_names,
                last_names=last_names,
            )
        )
    except ValidationError as e:
        return ParseResult.failure(_describe(e))


def parse_sale_header(
    line: str, separator: str = settings.FIELD_SEPARATOR
) -> ParseResult[SaleHeader]:
    """Parses the first line of a sale file, `documentType;documentNumber`."""
    fields = split_fields(line, separator)
    if len(fields) < 2:
        return ParseResult.failure(f"expected 2 header fields, found {len(fields)}")

    try:
        return ParseResult.success(
            SaleHeader(document_type=fields[0], document_number=fields[1])
        )
    except ValidationError as e:
        return ParseResult.failure(_describe(e))


def parse_sale_line(
    line: str, separator: str = settings.FIELD_SEPARATOR
) -> ParseResult[SaleLine]:
    """
    Parses `productId;quantity`. Extra trailing fields are ignored, so lines
    written as `P0001;4;` are accepted. The quantity must be a plain, strictly
    positive integer.
    """
    fields = split_fields(line, separator)
    if len(fields) < 2:
        return ParseResult.failure(f"expected 2 fields, found {len(fields)}")

    product_id, quantity_text = fields[0], fields[1]
    if not _INTEGER_RE.match(quantity_text):
        return ParseResult.failure(f"quantity '{quantity_text}' is not an integer")

    try:
        quantity = int(quantity_text)
    except ValueError:
        # Past the interpreter's limit on int conversion (4300 digits).
        return ParseResult.failure(
            f"quantity with {len(quantity_text)} digits is too large"
        )
    if quantity <= 0:
        return ParseResult.failure(f"quantity must be positive, got {quantity}")

    try:
        return ParseResult.success(SaleLine(product_id=product_id, quantity=quantity))
    except ValidationError as e:
        return ParseResult.failure(_describe(e))
