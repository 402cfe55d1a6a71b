"""Domain model entities for shopbooks.

These are pure data classes representing bookkeeping concepts, independent of
the database schema. Services and report aggregation only ever see these
types; the database layer maps its ORM rows onto them.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Oficina y Administración",
    "Marketing y Publicidad",
    "Servicios Públicos",
    "Transporte",
    "Alimentación",
    "Tecnología",
    "Mantenimiento",
    "Seguros",
    "Impuestos",
    "Otros",
)

PAYMENT_METHODS: tuple[str, ...] = ("Efectivo", "Tarjeta", "Transferencia", "Crédito")

DEFAULT_PAYMENT_METHOD = "Efectivo"


class MovementKind(str, Enum):
    """Direction of a stock movement."""

    IN = "IN"
    OUT = "OUT"


class InvoiceDirection(str, Enum):
    """Whether an invoice was issued to a customer or received from a supplier."""

    SALES = "SALES"
    PURCHASE = "PURCHASE"

    @property
    def stock_movement(self) -> MovementKind:
        """Stock effect of this invoice's line items."""
        return MovementKind.OUT if self is InvoiceDirection.SALES else MovementKind.IN

    @property
    def party_kind(self) -> "PartyKind":
        """Kind of party an invoice in this direction must reference."""
        return PartyKind.CUSTOMER if self is InvoiceDirection.SALES else PartyKind.SUPPLIER


class InvoiceStatus(str, Enum):
    """Derived settlement status of an invoice."""

    PENDING = "Pending"
    PAID = "Paid"

    @classmethod
    def derive(cls, paid_amount: Decimal, total_amount: Decimal) -> "InvoiceStatus":
        """Paid iff the paid amount covers the total."""
        return cls.PAID if paid_amount >= total_amount else cls.PENDING


class PartyKind(str, Enum):
    """Customer or supplier."""

    CUSTOMER = "CUSTOMER"
    SUPPLIER = "SUPPLIER"


@dataclass(frozen=True)
class Product:
    """Stocked product domain entity."""

    id: int
    sku: str
    name: str
    description: Optional[str]
    current_quantity: int
    created_at: datetime


@dataclass(frozen=True)
class InventoryMovement:
    """Posted stock movement with a before/after snapshot."""

    id: int
    product_id: int
    kind: MovementKind
    quantity: int
    quantity_before: int
    quantity_after: int
    note: Optional[str]
    moved_at: datetime

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.kind is MovementKind.IN else -self.quantity


@dataclass(frozen=True)
class Party:
    """Customer or supplier domain entity."""

    id: int
    kind: PartyKind
    name: str
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class LineItem:
    """One product/quantity/price row of an invoice."""

    id: int
    invoice_id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class LineItemInput:
    """Line item as entered, before it is attached to an invoice."""

    product_id: int
    quantity: int
    unit_price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Invoice:
    """Sales or purchase invoice domain entity."""

    id: int
    direction: InvoiceDirection
    number: str
    party_id: int
    issue_date: date
    due_date: Optional[date]
    payment_method: str
    description: Optional[str]
    total_amount: Decimal
    paid_amount: Decimal
    status: InvoiceStatus
    created_at: datetime

    @property
    def balance(self) -> Decimal:
        """Amount still owed on the invoice."""
        return self.total_amount - self.paid_amount


@dataclass(frozen=True)
class Payment:
    """Payment received (sales) or made (purchase) against an invoice."""

    id: int
    invoice_id: int
    amount: Decimal
    paid_on: date
    note: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Expense:
    """Operating expense domain entity."""

    id: int
    spent_on: date
    description: str
    category: str
    amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total for one category."""

    category: str
    total: Decimal
    count: int = 0
    percentage: Decimal = Decimal("0")


class TransactionType(str, Enum):
    """Kind of entry in the recent-transactions feed."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class RecentTransaction:
    """Entry in the recent-transactions feed of the financial report."""

    date: date
    amount: Decimal
    type: TransactionType
    description: str


@dataclass(frozen=True)
class FinancialSummary:
    """Figures shown on the financial report."""

    total_income: Decimal
    monthly_income: Decimal
    total_expenses: Decimal
    monthly_expenses: Decimal
    net_profit: Decimal
    monthly_profit: Decimal
    pending_receivables: Decimal
    net_margin: Decimal
    top_expense_categories: tuple[CategoryTotal, ...] = ()
    recent_transactions: tuple[RecentTransaction, ...] = ()
    total_sales_invoices: int = 0
    total_expense_records: int = 0


@dataclass(frozen=True)
class InventorySummary:
    """Header figures of the inventory screen."""

    total_products: int
    total_stock: int
    low_stock_threshold: int
    low_stock_products: tuple[Product, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AccountsSummary:
    """Header figures of the receivables or payables screen."""

    direction: InvoiceDirection
    party_count: int
    total_paid: Decimal
    outstanding: Decimal
    pending_invoice_count: int
