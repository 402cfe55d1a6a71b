"""SQLAlchemy models for shopbooks database."""

from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Enum,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from shopbooks.domain.entities import InvoiceDirection, InvoiceStatus, MovementKind, PartyKind

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Product(Base):
    """Product model."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    sku = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    current_quantity = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    movements = relationship("InventoryMovement", back_populates="product")


class InventoryMovement(Base):
    """Stock ledger entry."""

    __tablename__ = "inventory_movements"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    kind = Column(Enum(MovementKind), nullable=False)
    quantity = Column(Integer, nullable=False)
    quantity_before = Column(Integer, nullable=False)
    quantity_after = Column(Integer, nullable=False)
    note = Column(String, nullable=True)
    moved_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    product = relationship("Product", back_populates="movements")


class Party(Base):
    """Customer or supplier model."""

    __tablename__ = "parties"

    id = Column(Integer, primary_key=True)
    kind = Column(Enum(PartyKind), nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    invoices = relationship("Invoice", back_populates="party")


class Invoice(Base):
    """Sales or purchase invoice model."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    direction = Column(Enum(InvoiceDirection), nullable=False)
    number = Column(String, nullable=False)
    party_id = Column(Integer, ForeignKey("parties.id"), nullable=False)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    payment_method = Column(String, nullable=False)
    description = Column(String, nullable=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    paid_amount = Column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)
    status = Column(Enum(InvoiceStatus), default=InvoiceStatus.PENDING, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Invoice numbers are unique per direction
    __table_args__ = (UniqueConstraint("direction", "number", name="uq_invoice_direction_number"),)

    # Relationships
    party = relationship("Party", back_populates="invoices")
    line_items = relationship(
        "InvoiceLineItem", back_populates="invoice", cascade="all, delete-orphan"
    )
    payments = relationship("Payment", back_populates="invoice")


class InvoiceLineItem(Base):
    """Invoice line item model."""

    __tablename__ = "invoice_line_items"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="line_items")
    product = relationship("Product")


class Payment(Base):
    """Payment ledger entry."""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    paid_on = Column(Date, nullable=False)
    note = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="payments")


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    spent_on = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
