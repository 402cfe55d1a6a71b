"""Parsing of invoice line items given on the command line."""

from shopbooks.domain.entities import LineItemInput
from shopbooks.domain.inventory import InventoryService
from shopbooks.utils.amount_parser import parse_amount
from shopbooks.utils.resolvers import resolve_product


def parse_line_item(spec: str, inventory_service: InventoryService) -> LineItemInput:
    """Parse a ``PRODUCT:QUANTITY:UNIT_PRICE`` spec into a line item.

    PRODUCT is a SKU or product ID, e.g. ``"CAB-01:3:12.50"``.

    Raises:
        ValueError: If the spec is malformed or the product is unknown
    """
    parts = spec.rsplit(":", 2)
    if len(parts) != 3:
        raise ValueError(f"Line item '{spec}' must look like PRODUCT:QUANTITY:UNIT_PRICE")
    product, quantity_str, price_str = parts
    try:
        quantity = int(quantity_str)
    except ValueError:
        raise ValueError(f"Line item '{spec}' has an invalid quantity '{quantity_str}'") from None
    if quantity <= 0:
        raise ValueError(f"Line item '{spec}' must have a positive quantity")

    return LineItemInput(
        product_id=resolve_product(inventory_service, product),
        quantity=quantity,
        unit_price=parse_amount(price_str),
    )
