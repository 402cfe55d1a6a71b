"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input, rejected before any write."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class InsufficientStock(DomainError):
    """An OUT movement would drive a product's quantity below zero."""


class OverpaymentRejected(DomainError):
    """A payment would push an invoice's paid amount over its total."""


class BackendError(DomainError):
    """The record store failed; wraps the backend's message."""


def product_not_found(product_id: int) -> str:
    """Return message for missing product."""
    return f"Product {product_id} not found"


def party_not_found(party_id: int) -> str:
    """Return message for missing customer or supplier."""
    return f"Party {party_id} not found"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def duplicate_sku(sku: str) -> str:
    """Return message for duplicate product SKU."""
    return f"Product with SKU '{sku}' already exists"


def duplicate_invoice_number(number: str, direction: str) -> str:
    """Return message for duplicate invoice number within a direction."""
    return f"{direction.capitalize()} invoice '{number}' already exists"


def insufficient_stock(sku: str, available: int, requested: int) -> str:
    """Return message when stock cannot cover an outgoing quantity."""
    return (
        f"Insufficient stock for '{sku}': {available} available, "
        f"{requested} requested"
    )


def overpayment(number: str, balance: Decimal, amount: Decimal) -> str:
    """Return message when a payment exceeds an invoice's balance."""
    return (
        f"Payment of {amount:.2f} exceeds the pending balance of "
        f"{balance:.2f} on invoice '{number}'"
    )


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def product_delete_blocked(product_id: int, movement_count: int, line_item_count: int) -> str:
    """Return message when a product has movement history or invoice lines."""
    parts = []
    if movement_count > 0:
        parts.append(_plural(movement_count, "stock movement"))
    if line_item_count > 0:
        parts.append(_plural(line_item_count, "invoice line"))
    return f"Cannot delete product {product_id}: it has {', '.join(parts)}."


def party_delete_blocked(party_id: int, invoice_count: int) -> str:
    """Return message when a customer or supplier still has invoices."""
    return (
        f"Cannot delete party {party_id}: it has {_plural(invoice_count, 'invoice')}. "
        "Please delete them first."
    )


def invoice_delete_blocked(number: str, payment_count: int) -> str:
    """Return message when an invoice has recorded payments."""
    return f"Cannot delete invoice '{number}': it has {_plural(payment_count, 'recorded payment')}."
