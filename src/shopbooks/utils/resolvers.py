"""Utilities for resolving product SKUs and party names to IDs."""

from typing import Optional

from shopbooks.domain.entities import PartyKind
from shopbooks.domain.inventory import InventoryService
from shopbooks.domain.invoice import InvoiceService


def resolve_product(inventory_service: InventoryService, product: str | int) -> int:
    """Resolve a product SKU or ID to a product ID.

    A SKU match wins over an ID so purely numeric SKUs still resolve.

    Raises:
        ValueError: If the product is not found
    """
    by_sku = inventory_service.get_product_by_sku(str(product))
    if by_sku is not None:
        return by_sku.id

    try:
        product_id = int(product)
    except (ValueError, TypeError):
        raise ValueError(f"Product '{product}' not found") from None
    if inventory_service.get_product(product_id) is None:
        raise ValueError(f"Product ID {product_id} not found")
    return product_id


def resolve_party(
    invoice_service: InvoiceService, party: str | int, kind: Optional[PartyKind] = None
) -> int:
    """Resolve a customer or supplier name or ID to a party ID.

    Raises:
        ValueError: If no party of the given kind matches
    """
    label = {PartyKind.CUSTOMER: "Customer", PartyKind.SUPPLIER: "Supplier"}.get(kind, "Party")

    # Try to parse as integer (handles string IDs like "1")
    try:
        party_id = int(party)
    except (ValueError, TypeError):
        party_id = None
    if party_id is not None:
        party_obj = invoice_service.get_party(party_id)
        if party_obj is None or (kind is not None and party_obj.kind is not kind):
            raise ValueError(f"{label} ID {party_id} not found")
        return party_id

    for candidate in invoice_service.list_parties(kind):
        if candidate.name == party:
            return candidate.id
    raise ValueError(f"{label} '{party}' not found")
