"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from shopbooks.database.models import (
    InventoryMovement as ORMInventoryMovement,
    Invoice as ORMInvoice,
    Product as ORMProduct,
)
from shopbooks.database.mappers import invoice_to_domain, movement_to_domain, product_to_domain
from shopbooks.domain.entities import (
    InventoryMovement,
    Invoice,
    InvoiceDirection,
    InvoiceStatus,
    MovementKind,
    Product,
)


def test_product_to_domain():
    orm_product = ORMProduct(
        id=1,
        sku="CAB-01",
        name="HDMI cable",
        description=None,
        current_quantity=10,
        created_at=datetime.now(UTC),
    )

    product = product_to_domain(orm_product)

    assert isinstance(product, Product)
    assert product.sku == "CAB-01"
    assert product.current_quantity == 10
    assert product.created_at == orm_product.created_at


def test_movement_to_domain():
    orm_movement = ORMInventoryMovement(
        id=3,
        product_id=1,
        kind=MovementKind.OUT,
        quantity=4,
        quantity_before=10,
        quantity_after=6,
        note="Sales invoice F-1",
        moved_at=datetime.now(UTC),
    )

    movement = movement_to_domain(orm_movement)

    assert isinstance(movement, InventoryMovement)
    assert movement.kind is MovementKind.OUT
    assert movement.signed_quantity == -4
    assert (movement.quantity_before, movement.quantity_after) == (10, 6)


def test_invoice_to_domain():
    orm_invoice = ORMInvoice(
        id=7,
        direction=InvoiceDirection.PURCHASE,
        number="P-7",
        party_id=2,
        issue_date=date(2024, 3, 1),
        due_date=date(2024, 3, 31),
        payment_method="Transferencia",
        description="Cables",
        total_amount=Decimal("120.00"),
        paid_amount=Decimal("20.00"),
        status=InvoiceStatus.PENDING,
        created_at=datetime.now(UTC),
    )

    invoice = invoice_to_domain(orm_invoice)

    assert isinstance(invoice, Invoice)
    assert invoice.direction is InvoiceDirection.PURCHASE
    assert invoice.due_date == date(2024, 3, 31)
    assert invoice.balance == Decimal("100.00")
