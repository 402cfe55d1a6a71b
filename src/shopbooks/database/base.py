"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from shopbooks.domain.entities import (
    Expense,
    InventoryMovement,
    Invoice,
    InvoiceDirection,
    InvoiceStatus,
    LineItem,
    LineItemInput,
    MovementKind,
    Party,
    PartyKind,
    Payment,
    Product,
)


class Database(ABC):
    """Abstract record store for shopbooks.

    Every write commits on its own unless it runs inside ``transaction()``,
    in which case all writes of the block commit together at the end or are
    rolled back together. Backend failures surface as ``BackendError``.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Group the writes of a ``with`` block into one unit of work."""
        pass

    # Product operations
    @abstractmethod
    def create_product(
        self, sku: str, name: str, description: Optional[str], current_quantity: int
    ) -> int:
        """Create a product. Returns product ID."""
        pass

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        """Get product by ID."""
        pass

    @abstractmethod
    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        """Get product by SKU."""
        pass

    @abstractmethod
    def list_products(self) -> list[Product]:
        """List all products ordered by name."""
        pass

    @abstractmethod
    def update_product(
        self,
        product_id: int,
        sku: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update descriptive product fields that are not None."""
        pass

    @abstractmethod
    def set_product_quantity(self, product_id: int, quantity: int) -> None:
        """Store a product's current quantity."""
        pass

    @abstractmethod
    def delete_product(self, product_id: int) -> None:
        """Delete a product."""
        pass

    @abstractmethod
    def get_product_movement_count(self, product_id: int) -> int:
        """Count movements posted against a product."""
        pass

    @abstractmethod
    def get_product_line_item_count(self, product_id: int) -> int:
        """Count invoice line items referencing a product."""
        pass

    # Inventory movement operations
    @abstractmethod
    def create_movement(
        self,
        product_id: int,
        kind: MovementKind,
        quantity: int,
        quantity_before: int,
        quantity_after: int,
        note: Optional[str] = None,
    ) -> int:
        """Append a movement to the stock ledger. Returns movement ID."""
        pass

    @abstractmethod
    def get_movement(self, movement_id: int) -> Optional[InventoryMovement]:
        """Get movement by ID."""
        pass

    @abstractmethod
    def list_movements(
        self, product_id: Optional[int] = None, limit: Optional[int] = None
    ) -> list[InventoryMovement]:
        """List movements, newest first, optionally for one product."""
        pass

    # Party operations
    @abstractmethod
    def create_party(
        self,
        kind: PartyKind,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a customer or supplier. Returns party ID."""
        pass

    @abstractmethod
    def get_party(self, party_id: int) -> Optional[Party]:
        """Get party by ID."""
        pass

    @abstractmethod
    def list_parties(self, kind: Optional[PartyKind] = None) -> list[Party]:
        """List parties ordered by name, optionally filtered by kind."""
        pass

    @abstractmethod
    def update_party(
        self,
        party_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> None:
        """Update party fields that are not None."""
        pass

    @abstractmethod
    def delete_party(self, party_id: int) -> None:
        """Delete a party."""
        pass

    @abstractmethod
    def get_party_invoice_count(self, party_id: int) -> int:
        """Count invoices referencing a party."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        direction: InvoiceDirection,
        number: str,
        party_id: int,
        issue_date: date,
        due_date: Optional[date],
        payment_method: str,
        description: Optional[str],
        total_amount: Decimal,
    ) -> int:
        """Create an unpaid, pending invoice. Returns invoice ID."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def get_invoice_by_number(self, direction: InvoiceDirection, number: str) -> Optional[Invoice]:
        """Get invoice by its number within a direction."""
        pass

    @abstractmethod
    def list_invoices(
        self,
        direction: Optional[InvoiceDirection] = None,
        status: Optional[InvoiceStatus] = None,
        party_id: Optional[int] = None,
    ) -> list[Invoice]:
        """List invoices, most recently issued first."""
        pass

    @abstractmethod
    def update_invoice(
        self,
        invoice_id: int,
        number: str,
        party_id: int,
        issue_date: date,
        due_date: Optional[date],
        payment_method: str,
        description: Optional[str],
        total_amount: Decimal,
        status: InvoiceStatus,
    ) -> None:
        """Replace an invoice's header fields. The paid amount is untouched."""
        pass

    @abstractmethod
    def update_invoice_payment(
        self, invoice_id: int, paid_amount: Decimal, status: InvoiceStatus
    ) -> None:
        """Store an invoice's paid amount and status."""
        pass

    @abstractmethod
    def delete_invoice(self, invoice_id: int) -> None:
        """Delete an invoice together with its line items."""
        pass

    @abstractmethod
    def get_invoice_payment_count(self, invoice_id: int) -> int:
        """Count payments recorded against an invoice."""
        pass

    # Line item operations
    @abstractmethod
    def add_line_items(self, invoice_id: int, items: list[LineItemInput]) -> list[int]:
        """Attach line items to an invoice. Returns line item IDs."""
        pass

    @abstractmethod
    def list_line_items(self, invoice_id: int) -> list[LineItem]:
        """List an invoice's line items in entry order."""
        pass

    @abstractmethod
    def delete_line_items(self, invoice_id: int) -> None:
        """Delete all line items of an invoice."""
        pass

    # Payment operations
    @abstractmethod
    def create_payment(
        self, invoice_id: int, amount: Decimal, paid_on: date, note: Optional[str] = None
    ) -> int:
        """Append a payment to an invoice's ledger. Returns payment ID."""
        pass

    @abstractmethod
    def get_payment(self, payment_id: int) -> Optional[Payment]:
        """Get payment by ID."""
        pass

    @abstractmethod
    def list_payments(
        self,
        invoice_id: Optional[int] = None,
        direction: Optional[InvoiceDirection] = None,
        limit: Optional[int] = None,
    ) -> list[Payment]:
        """List payments, most recent payment date first."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self, spent_on: date, description: str, category: str, amount: Decimal
    ) -> int:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Expense]:
        """List expenses, most recent first, with optional filters."""
        pass

    @abstractmethod
    def update_expense(
        self,
        expense_id: int,
        spent_on: Optional[date] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        amount: Optional[Decimal] = None,
    ) -> None:
        """Update expense fields that are not None."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        pass
