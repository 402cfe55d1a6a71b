"""Invoice domain service: parties, invoices, line items and the payment ledger."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from shopbooks.database.base import Database
from shopbooks.domain.entities import (
    DEFAULT_PAYMENT_METHOD,
    PAYMENT_METHODS,
    AccountsSummary,
    Invoice,
    InvoiceDirection,
    InvoiceStatus,
    LineItem,
    LineItemInput,
    Party,
    PartyKind,
    Payment,
)
from shopbooks.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    OverpaymentRejected,
    ValidationError,
    duplicate_invoice_number,
    invoice_delete_blocked,
    invoice_not_found,
    overpayment,
    party_delete_blocked,
    party_not_found,
)
from shopbooks.domain.inventory import InventoryService
from shopbooks.domain.money import ZERO, to_money, to_positive_money
from shopbooks.domain.notifications import LoggingNotifier, Notifier, report_errors

logger = logging.getLogger(__name__)


def invoice_total(line_items: Iterable[Union[LineItem, LineItemInput]]) -> Decimal:
    """Sum of line item subtotals."""
    return sum((item.subtotal for item in line_items), ZERO)


def _require_positive_total(total: Decimal) -> None:
    # An unpaid invoice with a zero total could never be settled
    if total <= ZERO:
        raise ValidationError("Invoice total must be greater than zero")


class InvoiceService:
    """Service for managing customers, suppliers, invoices and payments.

    Sales and purchase invoices behave identically apart from the direction
    of their stock effect and the kind of party they reference.
    """

    def __init__(
        self,
        db: Database,
        notifier: Optional[Notifier] = None,
        inventory: Optional[InventoryService] = None,
    ):
        """Initialize invoice service.

        Args:
            db: Database instance
            notifier: Sink for user-facing messages (defaults to logging)
            inventory: Inventory service used for line-item stock effects
        """
        self.db = db
        self.notifier = notifier or LoggingNotifier()
        self.inventory = inventory or InventoryService(db, self.notifier)

    # Party operations
    def create_party(
        self,
        kind: PartyKind,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a customer or supplier.

        Returns:
            Party ID

        Raises:
            ValidationError: If the name is blank
        """
        label = "Customer" if kind is PartyKind.CUSTOMER else "Supplier"
        with report_errors(self.notifier, f"{label} not added"):
            name = (name or "").strip()
            if not name:
                raise ValidationError(f"{label} name is required")
            party_id = self.db.create_party(
                kind=kind, name=name, email=email, phone=phone, address=address
            )
        self.notifier.success(f"{label} added", f"'{name}' has been registered.")
        return party_id

    def get_party(self, party_id: int) -> Optional[Party]:
        """Get party by ID."""
        return self.db.get_party(party_id)

    def list_parties(self, kind: Optional[PartyKind] = None) -> list[Party]:
        """List parties ordered by name."""
        return self.db.list_parties(kind)

    def _require_party(self, party_id: int, kind: Optional[PartyKind] = None) -> Party:
        party = self.db.get_party(party_id)
        if party is None or (kind is not None and party.kind is not kind):
            raise NotFoundError(party_not_found(party_id))
        return party

    def update_party(
        self,
        party_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> None:
        """Update contact fields of a customer or supplier."""
        with report_errors(self.notifier, "Contact not updated"):
            self._require_party(party_id)
            if name is not None:
                name = name.strip()
                if not name:
                    raise ValidationError("Name cannot be blank")
            self.db.update_party(party_id, name=name, email=email, phone=phone, address=address)
        self.notifier.success("Contact updated", f"Party {party_id} has been updated.")

    def delete_party(self, party_id: int) -> None:
        """Delete a customer or supplier with no invoices.

        Raises:
            NotFoundError: If the party doesn't exist
            DependencyError: If invoices still reference the party
        """
        with report_errors(self.notifier, "Contact not deleted"):
            party = self._require_party(party_id)
            invoice_count = self.db.get_party_invoice_count(party_id)
            if invoice_count > 0:
                raise DependencyError(party_delete_blocked(party_id, invoice_count))
            self.db.delete_party(party_id)
        self.notifier.success("Contact deleted", f"'{party.name}' has been removed.")

    # Invoice operations
    def _require_invoice(self, invoice_id: int) -> Invoice:
        invoice = self.db.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        return invoice

    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        return self.db.get_invoice(invoice_id)

    def get_invoice_by_number(self, direction: InvoiceDirection, number: str) -> Optional[Invoice]:
        """Get invoice by number within a direction."""
        return self.db.get_invoice_by_number(direction, number)

    def list_invoices(
        self,
        direction: Optional[InvoiceDirection] = None,
        status: Optional[InvoiceStatus] = None,
        party_id: Optional[int] = None,
    ) -> list[Invoice]:
        """List invoices, most recently issued first."""
        return self.db.list_invoices(direction=direction, status=status, party_id=party_id)

    def list_line_items(self, invoice_id: int) -> list[LineItem]:
        """List the line items of an invoice."""
        return self.db.list_line_items(invoice_id)

    def _normalize_line_items(self, line_items: Iterable[LineItemInput]) -> list[LineItemInput]:
        items = []
        for item in line_items:
            if isinstance(item.quantity, bool) or not isinstance(item.quantity, int) or item.quantity <= 0:
                raise ValidationError(
                    f"Line quantity must be a positive whole number, got {item.quantity!r}"
                )
            unit_price = to_money(item.unit_price, "Unit price")
            if unit_price < ZERO:
                raise ValidationError("Unit price cannot be negative")
            items.append(
                LineItemInput(product_id=item.product_id, quantity=item.quantity, unit_price=unit_price)
            )
        return items

    def _check_number(
        self, direction: InvoiceDirection, number: str, invoice_id: Optional[int] = None
    ) -> str:
        number = (number or "").strip()
        if not number:
            raise ValidationError("Invoice number is required")
        existing = self.db.get_invoice_by_number(direction, number)
        if existing is not None and existing.id != invoice_id:
            raise ConflictError(duplicate_invoice_number(number, direction.value.lower()))
        return number

    def _check_payment_method(self, payment_method: str) -> None:
        if payment_method not in PAYMENT_METHODS:
            raise ValidationError(
                f"Unknown payment method '{payment_method}'. Choose one of: {', '.join(PAYMENT_METHODS)}"
            )

    def create_invoice(
        self,
        direction: InvoiceDirection,
        number: str,
        party_id: int,
        issue_date: date,
        line_items: Optional[Iterable[LineItemInput]] = None,
        total_amount: Optional[Union[Decimal, int, str]] = None,
        due_date: Optional[date] = None,
        payment_method: str = DEFAULT_PAYMENT_METHOD,
        description: Optional[str] = None,
    ) -> int:
        """Create a sales or purchase invoice.

        With line items the total is their subtotal sum and their stock
        effect is posted once, now. Without line items the manual total is
        used. The header, its lines and the stock movements are written as
        one unit of work.

        Args:
            direction: SALES (customer, stock out) or PURCHASE (supplier, stock in)
            number: Invoice number, unique within the direction
            party_id: Customer or supplier ID matching the direction
            issue_date: Date of issue
            line_items: Optional product lines
            total_amount: Manual total, required when there are no line items
            due_date: Optional due date
            payment_method: One of PAYMENT_METHODS
            description: Optional free text

        Returns:
            Invoice ID

        Raises:
            ValidationError: If input is missing or malformed
            NotFoundError: If the party or a product doesn't exist
            ConflictError: If the number is already used in this direction
            InsufficientStock: If sales lines exceed available stock
        """
        with report_errors(self.notifier, "Invoice not created"):
            number = self._check_number(direction, number)
            self._require_party(party_id, direction.party_kind)
            self._check_payment_method(payment_method)
            items = self._normalize_line_items(line_items or [])
            if items:
                total = invoice_total(items)
                _require_positive_total(total)
            elif total_amount is None:
                raise ValidationError("An invoice needs line items or a total amount")
            else:
                total = to_positive_money(total_amount, "Total amount")

            with self.db.transaction():
                invoice_id = self.db.create_invoice(
                    direction=direction,
                    number=number,
                    party_id=party_id,
                    issue_date=issue_date,
                    due_date=due_date,
                    payment_method=payment_method,
                    description=description,
                    total_amount=total,
                )
                if items:
                    self.db.add_line_items(invoice_id, items)
                    invoice = self._require_invoice(invoice_id)
                    self.inventory.apply_invoice_line_items(invoice, items, direction)

        logger.info("Created %s invoice %s for %s", direction.value.lower(), number, total)
        self.notifier.success("Invoice created", f"Invoice '{number}' has been registered.")
        return invoice_id

    def update_invoice(
        self,
        invoice_id: int,
        number: Optional[str] = None,
        party_id: Optional[int] = None,
        issue_date: Optional[date] = None,
        due_date: Optional[date] = None,
        payment_method: Optional[str] = None,
        description: Optional[str] = None,
        total_amount: Optional[Union[Decimal, int, str]] = None,
        line_items: Optional[Iterable[LineItemInput]] = None,
    ) -> None:
        """Update an invoice's header and optionally replace its line items.

        The paid amount is preserved. Replacing line items recomputes the
        total and posts the stock difference between the old and new lines.
        The status is re-derived against the new total.

        Raises:
            NotFoundError: If the invoice, party or a product doesn't exist
            ValidationError: If the new total is below the amount already paid,
                or a manual total is given for an invoice with line items
            ConflictError: If the new number is taken
            InsufficientStock: If the replacement lines need more stock than available
        """
        with report_errors(self.notifier, "Invoice not updated"):
            invoice = self._require_invoice(invoice_id)
            direction = invoice.direction
            new_number = (
                self._check_number(direction, number, invoice_id) if number is not None else invoice.number
            )
            new_party_id = party_id if party_id is not None else invoice.party_id
            self._require_party(new_party_id, direction.party_kind)
            new_method = payment_method if payment_method is not None else invoice.payment_method
            self._check_payment_method(new_method)

            old_items = self.db.list_line_items(invoice_id)
            new_items = None
            if line_items is not None:
                new_items = self._normalize_line_items(line_items)
                if not new_items:
                    raise ValidationError("Replacement line items cannot be empty")
                new_total = invoice_total(new_items)
                _require_positive_total(new_total)
            elif total_amount is not None:
                if old_items:
                    raise ValidationError(
                        "The total of an invoice with line items is derived from its lines"
                    )
                new_total = to_positive_money(total_amount, "Total amount")
            else:
                new_total = invoice.total_amount

            if new_total < invoice.paid_amount:
                raise ValidationError(
                    f"New total {new_total:.2f} is below the {invoice.paid_amount:.2f} already paid"
                )

            with self.db.transaction():
                self.db.update_invoice(
                    invoice_id,
                    number=new_number,
                    party_id=new_party_id,
                    issue_date=issue_date if issue_date is not None else invoice.issue_date,
                    due_date=due_date if due_date is not None else invoice.due_date,
                    payment_method=new_method,
                    description=description if description is not None else invoice.description,
                    total_amount=new_total,
                    status=InvoiceStatus.derive(invoice.paid_amount, new_total),
                )
                if new_items is not None:
                    self.db.delete_line_items(invoice_id)
                    self.db.add_line_items(invoice_id, new_items)
                    self.inventory.reconcile_line_items(
                        self._require_invoice(invoice_id), old_items, new_items, direction
                    )

        self.notifier.success("Invoice updated", f"Invoice '{new_number}' has been updated.")

    def delete_invoice(self, invoice_id: int) -> None:
        """Delete an invoice and its line items.

        Stock movements already posted for the invoice stay in the ledger.

        Raises:
            NotFoundError: If the invoice doesn't exist
            DependencyError: If payments were recorded against the invoice
        """
        with report_errors(self.notifier, "Invoice not deleted"):
            invoice = self._require_invoice(invoice_id)
            payment_count = self.db.get_invoice_payment_count(invoice_id)
            if payment_count > 0:
                raise DependencyError(invoice_delete_blocked(invoice.number, payment_count))
            self.db.delete_invoice(invoice_id)

        logger.info("Deleted %s invoice %s", invoice.direction.value.lower(), invoice.number)
        self.notifier.success("Invoice deleted", f"Invoice '{invoice.number}' has been removed.")

    # Payment operations
    def record_payment(
        self,
        invoice_id: int,
        amount: Union[Decimal, int, str],
        paid_on: date,
        note: Optional[str] = None,
    ) -> tuple[Invoice, Payment]:
        """Record a payment against an invoice.

        Args:
            invoice_id: Invoice being paid
            amount: Positive payment amount
            paid_on: Payment date
            note: Optional free-text note

        Returns:
            Tuple of (updated invoice, created payment)

        Raises:
            ValidationError: If the amount is not positive
            NotFoundError: If the invoice doesn't exist
            OverpaymentRejected: If the payment exceeds the pending balance
        """
        with report_errors(self.notifier, "Payment not recorded"):
            amount = to_positive_money(amount, "Payment amount")
            invoice = self._require_invoice(invoice_id)
            new_paid = invoice.paid_amount + amount
            if new_paid > invoice.total_amount:
                logger.warning(
                    "Rejected payment of %s on invoice %s with balance %s",
                    amount,
                    invoice.number,
                    invoice.balance,
                )
                raise OverpaymentRejected(overpayment(invoice.number, invoice.balance, amount))

            with self.db.transaction():
                payment_id = self.db.create_payment(
                    invoice_id=invoice_id, amount=amount, paid_on=paid_on, note=note
                )
                self.db.update_invoice_payment(
                    invoice_id, new_paid, InvoiceStatus.derive(new_paid, invoice.total_amount)
                )

        logger.info("Recorded payment of %s on invoice %s", amount, invoice.number)
        self.notifier.success("Payment recorded", f"{amount:.2f} applied to invoice '{invoice.number}'.")
        return self._require_invoice(invoice_id), self.db.get_payment(payment_id)

    def list_payments(
        self,
        direction: Optional[InvoiceDirection] = None,
        invoice_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[Payment]:
        """List payments, most recent first."""
        return self.db.list_payments(invoice_id=invoice_id, direction=direction, limit=limit)

    def get_accounts_summary(self, direction: InvoiceDirection) -> AccountsSummary:
        """Summarize receivables (SALES) or payables (PURCHASE)."""
        invoices = self.db.list_invoices(direction=direction)
        pending = [inv for inv in invoices if inv.status is InvoiceStatus.PENDING]
        return AccountsSummary(
            direction=direction,
            party_count=len(self.db.list_parties(direction.party_kind)),
            total_paid=sum((inv.paid_amount for inv in invoices), ZERO),
            outstanding=sum((inv.balance for inv in pending), ZERO),
            pending_invoice_count=len(pending),
        )
