"""Mapper functions to convert SQLAlchemy rows into domain entities."""

from shopbooks.domain import entities as domain
from shopbooks.database.models import (
    Expense as ORMExpense,
    InventoryMovement as ORMInventoryMovement,
    Invoice as ORMInvoice,
    InvoiceLineItem as ORMInvoiceLineItem,
    Party as ORMParty,
    Payment as ORMPayment,
    Product as ORMProduct,
)


def product_to_domain(orm_product: ORMProduct) -> domain.Product:
    """Convert SQLAlchemy Product model to domain Product entity."""
    return domain.Product(
        id=orm_product.id,
        sku=orm_product.sku,
        name=orm_product.name,
        description=orm_product.description,
        current_quantity=orm_product.current_quantity,
        created_at=orm_product.created_at,
    )


def movement_to_domain(orm_movement: ORMInventoryMovement) -> domain.InventoryMovement:
    """Convert SQLAlchemy InventoryMovement model to domain InventoryMovement entity."""
    return domain.InventoryMovement(
        id=orm_movement.id,
        product_id=orm_movement.product_id,
        kind=orm_movement.kind,
        quantity=orm_movement.quantity,
        quantity_before=orm_movement.quantity_before,
        quantity_after=orm_movement.quantity_after,
        note=orm_movement.note,
        moved_at=orm_movement.moved_at,
    )


def party_to_domain(orm_party: ORMParty) -> domain.Party:
    """Convert SQLAlchemy Party model to domain Party entity."""
    return domain.Party(
        id=orm_party.id,
        kind=orm_party.kind,
        name=orm_party.name,
        email=orm_party.email,
        phone=orm_party.phone,
        address=orm_party.address,
        created_at=orm_party.created_at,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        direction=orm_invoice.direction,
        number=orm_invoice.number,
        party_id=orm_invoice.party_id,
        issue_date=orm_invoice.issue_date,
        due_date=orm_invoice.due_date,
        payment_method=orm_invoice.payment_method,
        description=orm_invoice.description,
        total_amount=orm_invoice.total_amount,
        paid_amount=orm_invoice.paid_amount,
        status=orm_invoice.status,
        created_at=orm_invoice.created_at,
    )


def line_item_to_domain(orm_item: ORMInvoiceLineItem) -> domain.LineItem:
    """Convert SQLAlchemy InvoiceLineItem model to domain LineItem entity."""
    return domain.LineItem(
        id=orm_item.id,
        invoice_id=orm_item.invoice_id,
        product_id=orm_item.product_id,
        quantity=orm_item.quantity,
        unit_price=orm_item.unit_price,
        subtotal=orm_item.subtotal,
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.Payment:
    """Convert SQLAlchemy Payment model to domain Payment entity."""
    return domain.Payment(
        id=orm_payment.id,
        invoice_id=orm_payment.invoice_id,
        amount=orm_payment.amount,
        paid_on=orm_payment.paid_on,
        note=orm_payment.note,
        created_at=orm_payment.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        spent_on=orm_expense.spent_on,
        description=orm_expense.description,
        category=orm_expense.category,
        amount=orm_expense.amount,
        created_at=orm_expense.created_at,
    )
