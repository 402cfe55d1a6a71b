"""Inventory domain service: products and the stock movement ledger."""

import logging
from collections import Counter
from typing import Iterable, Optional, Union

from shopbooks.database.base import Database
from shopbooks.domain.entities import (
    InventoryMovement,
    InventorySummary,
    Invoice,
    InvoiceDirection,
    LineItem,
    LineItemInput,
    MovementKind,
    Product,
)
from shopbooks.domain.errors import (
    ConflictError,
    DependencyError,
    InsufficientStock,
    NotFoundError,
    ValidationError,
    duplicate_sku,
    insufficient_stock,
    product_delete_blocked,
    product_not_found,
)
from shopbooks.domain.notifications import LoggingNotifier, Notifier, report_errors

logger = logging.getLogger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 5

AnyLineItem = Union[LineItem, LineItemInput]


def _require_positive_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError(f"Quantity must be a positive whole number, got {quantity!r}")


def _coerce_kind(kind: Union[MovementKind, str]) -> MovementKind:
    try:
        return MovementKind(kind)
    except ValueError:
        raise ValidationError(f"Movement kind must be IN or OUT, got {kind!r}") from None


def net_quantities(items: Iterable[AnyLineItem]) -> Counter:
    """Total quantity per product over a set of line items."""
    totals: Counter = Counter()
    for item in items:
        totals[item.product_id] += item.quantity
    return totals


class InventoryService:
    """Service for managing products and posting stock movements.

    Every change to a product's quantity goes through the movement ledger, so
    ``current_quantity`` always equals the creation quantity plus the signed
    sum of the product's movements.
    """

    def __init__(self, db: Database, notifier: Optional[Notifier] = None):
        """Initialize inventory service.

        Args:
            db: Database instance
            notifier: Sink for user-facing messages (defaults to logging)
        """
        self.db = db
        self.notifier = notifier or LoggingNotifier()

    def _require_product(self, product_id: int) -> Product:
        product = self.db.get_product(product_id)
        if product is None:
            raise NotFoundError(product_not_found(product_id))
        return product

    def create_product(
        self,
        sku: str,
        name: str,
        description: Optional[str] = None,
        initial_quantity: int = 0,
    ) -> int:
        """Create a new product.

        Args:
            sku: Unique stock keeping unit
            name: Product name
            description: Optional description
            initial_quantity: Opening stock; immutable afterwards except through movements

        Returns:
            Product ID

        Raises:
            ValidationError: If sku or name is blank or the quantity is negative
            ConflictError: If the SKU is already taken
        """
        with report_errors(self.notifier, "Product not added"):
            sku = (sku or "").strip()
            name = (name or "").strip()
            if not sku or not name:
                raise ValidationError("Product SKU and name are required")
            if (
                isinstance(initial_quantity, bool)
                or not isinstance(initial_quantity, int)
                or initial_quantity < 0
            ):
                raise ValidationError("Initial quantity must be a whole number of at least 0")
            if self.db.get_product_by_sku(sku) is not None:
                raise ConflictError(duplicate_sku(sku))

            product_id = self.db.create_product(
                sku=sku, name=name, description=description, current_quantity=initial_quantity
            )

        logger.info("Created product %s (%s) with %d units", product_id, sku, initial_quantity)
        self.notifier.success("Product added", f"'{name}' has been registered.")
        return product_id

    def get_product(self, product_id: int) -> Optional[Product]:
        """Get product by ID."""
        return self.db.get_product(product_id)

    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        """Get product by SKU."""
        return self.db.get_product_by_sku(sku)

    def list_products(self) -> list[Product]:
        """List all products ordered by name."""
        return self.db.list_products()

    def update_product(
        self,
        product_id: int,
        sku: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update a product's descriptive fields.

        The quantity cannot be edited here; use ``apply_movement`` or
        ``correct_quantity``.

        Raises:
            NotFoundError: If the product doesn't exist
            ValidationError: If a provided sku or name is blank
            ConflictError: If the new SKU belongs to another product
        """
        with report_errors(self.notifier, "Product not updated"):
            self._require_product(product_id)
            if sku is not None:
                sku = sku.strip()
                if not sku:
                    raise ValidationError("Product SKU cannot be blank")
                existing = self.db.get_product_by_sku(sku)
                if existing is not None and existing.id != product_id:
                    raise ConflictError(duplicate_sku(sku))
            if name is not None:
                name = name.strip()
                if not name:
                    raise ValidationError("Product name cannot be blank")

            self.db.update_product(product_id, sku=sku, name=name, description=description)

        self.notifier.success("Product updated", f"Product {product_id} has been updated.")

    def delete_product(self, product_id: int) -> None:
        """Delete a product that has no stock history.

        Raises:
            NotFoundError: If the product doesn't exist
            DependencyError: If the product has movements or invoice lines
        """
        with report_errors(self.notifier, "Product not deleted"):
            product = self._require_product(product_id)
            movement_count = self.db.get_product_movement_count(product_id)
            line_item_count = self.db.get_product_line_item_count(product_id)
            if movement_count > 0 or line_item_count > 0:
                raise DependencyError(
                    product_delete_blocked(product_id, movement_count, line_item_count)
                )
            self.db.delete_product(product_id)

        logger.info("Deleted product %s (%s)", product_id, product.sku)
        self.notifier.success("Product deleted", f"'{product.name}' has been removed.")

    def _post_movement(
        self, product_id: int, kind: MovementKind, quantity: int, note: Optional[str]
    ) -> int:
        """Write a movement snapshot, then the product's new quantity.

        Callers run this inside a transaction and have already checked stock.
        """
        product = self._require_product(product_id)
        before = product.current_quantity
        after = before + quantity if kind is MovementKind.IN else before - quantity
        movement_id = self.db.create_movement(
            product_id=product_id,
            kind=kind,
            quantity=quantity,
            quantity_before=before,
            quantity_after=after,
            note=note,
        )
        self.db.set_product_quantity(product_id, after)
        logger.info(
            "Posted %s %d for product %s: %d -> %d", kind.value, quantity, product.sku, before, after
        )
        return movement_id

    def apply_movement(
        self,
        product_id: int,
        kind: Union[MovementKind, str],
        quantity: int,
        note: Optional[str] = None,
    ) -> tuple[Product, InventoryMovement]:
        """Post a single IN or OUT movement against a product.

        Args:
            product_id: Product to move
            kind: MovementKind.IN or MovementKind.OUT
            quantity: Positive number of units
            note: Optional free-text note

        Returns:
            Tuple of (updated product, created movement)

        Raises:
            ValidationError: If quantity or kind is invalid
            NotFoundError: If the product doesn't exist
            InsufficientStock: If an OUT movement would leave negative stock
        """
        with report_errors(self.notifier, "Movement not recorded"):
            _require_positive_quantity(quantity)
            kind = _coerce_kind(kind)
            product = self._require_product(product_id)
            if kind is MovementKind.OUT and quantity > product.current_quantity:
                logger.warning(
                    "Rejected OUT %d for %s with %d in stock",
                    quantity,
                    product.sku,
                    product.current_quantity,
                )
                raise InsufficientStock(
                    insufficient_stock(product.sku, product.current_quantity, quantity)
                )

            with self.db.transaction():
                movement_id = self._post_movement(product_id, kind, quantity, note)

        label = "Stock in" if kind is MovementKind.IN else "Stock out"
        self.notifier.success("Movement recorded", f"{label} of {quantity} for '{product.name}'.")
        return self._require_product(product_id), self.db.get_movement(movement_id)

    def _check_stock(self, required: Counter) -> None:
        """Reject when any product cannot cover its required outgoing quantity."""
        for product_id, quantity in required.items():
            product = self._require_product(product_id)
            if quantity > product.current_quantity:
                raise InsufficientStock(
                    insufficient_stock(product.sku, product.current_quantity, quantity)
                )

    def apply_invoice_line_items(
        self,
        invoice: Invoice,
        line_items: Iterable[AnyLineItem],
        direction: InvoiceDirection,
    ) -> list[int]:
        """Post the stock effect of a new invoice's line items.

        Sales lines move stock OUT, purchase lines move it IN. Sales lines are
        checked against available stock, aggregated per product, before any
        movement is written.

        Returns:
            IDs of the posted movements
        """
        items = list(line_items)
        kind = direction.stock_movement
        for item in items:
            _require_positive_quantity(item.quantity)
        if kind is MovementKind.OUT:
            self._check_stock(net_quantities(items))
        else:
            for product_id in net_quantities(items):
                self._require_product(product_id)

        note = f"{direction.value.capitalize()} invoice {invoice.number}"
        with self.db.transaction():
            return [
                self._post_movement(item.product_id, kind, item.quantity, note) for item in items
            ]

    def reconcile_line_items(
        self,
        invoice: Invoice,
        old_items: Iterable[AnyLineItem],
        new_items: Iterable[AnyLineItem],
        direction: InvoiceDirection,
    ) -> list[int]:
        """Post the per-product stock difference between two line-item sets.

        Used when an invoice's lines are replaced so stock matches the lines
        that are actually recorded.

        Returns:
            IDs of the posted movements
        """
        old_totals = net_quantities(old_items)
        new_totals = net_quantities(new_items)

        # Positive change means stock goes up
        sign = -1 if direction is InvoiceDirection.SALES else 1
        changes: dict[int, int] = {}
        for product_id in sorted(set(old_totals) | set(new_totals)):
            change = sign * (new_totals[product_id] - old_totals[product_id])
            if change != 0:
                changes[product_id] = change

        self._check_stock(
            Counter({pid: -change for pid, change in changes.items() if change < 0})
        )
        for product_id in changes:
            self._require_product(product_id)

        note = f"Adjustment for {direction.value.lower()} invoice {invoice.number}"
        with self.db.transaction():
            return [
                self._post_movement(
                    product_id,
                    MovementKind.IN if change > 0 else MovementKind.OUT,
                    abs(change),
                    note,
                )
                for product_id, change in changes.items()
            ]

    def correct_quantity(
        self, product_id: int, counted_quantity: int, note: Optional[str] = None
    ) -> Optional[tuple[Product, InventoryMovement]]:
        """Bring a product's stock to a physically counted quantity.

        The correction is posted as the movement that closes the gap, so the
        ledger still explains the new quantity.

        Returns:
            Tuple of (updated product, created movement), or None if the count
            already matches
        """
        with report_errors(self.notifier, "Stock not corrected"):
            if (
                isinstance(counted_quantity, bool)
                or not isinstance(counted_quantity, int)
                or counted_quantity < 0
            ):
                raise ValidationError("Counted quantity must be a whole number of at least 0")
            product = self._require_product(product_id)
            difference = counted_quantity - product.current_quantity
            if difference == 0:
                return None

            kind = MovementKind.IN if difference > 0 else MovementKind.OUT
            with self.db.transaction():
                movement_id = self._post_movement(
                    product_id, kind, abs(difference), note or "Stock count correction"
                )

        self.notifier.success(
            "Stock corrected", f"'{product.name}' now has {counted_quantity} units."
        )
        return self._require_product(product_id), self.db.get_movement(movement_id)

    def list_movements(
        self, product_id: Optional[int] = None, limit: Optional[int] = None
    ) -> list[InventoryMovement]:
        """List movements, newest first."""
        return self.db.list_movements(product_id=product_id, limit=limit)

    def get_inventory_summary(
        self, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> InventorySummary:
        """Summarize stock levels.

        Args:
            low_stock_threshold: Products at or below this quantity count as low stock
        """
        products = self.db.list_products()
        return InventorySummary(
            total_products=len(products),
            total_stock=sum(p.current_quantity for p in products),
            low_stock_threshold=low_stock_threshold,
            low_stock_products=tuple(
                p for p in products if p.current_quantity <= low_stock_threshold
            ),
        )
