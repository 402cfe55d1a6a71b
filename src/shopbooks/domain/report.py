"""Financial report aggregation.

The aggregation functions are pure: they fold already-fetched invoices,
expenses and payments into a ``FinancialSummary`` and never touch the
database. ``ReportService`` fetches the collections and recomputes the
whole summary on every call.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from shopbooks.database.base import Database
from shopbooks.domain.entities import (
    CategoryTotal,
    Expense,
    FinancialSummary,
    Invoice,
    InvoiceDirection,
    InvoiceStatus,
    Payment,
    RecentTransaction,
    TransactionType,
)
from shopbooks.domain.money import ZERO

TOP_CATEGORY_LIMIT = 5
RECENT_PER_SOURCE = 5
RECENT_TRANSACTION_LIMIT = 10

HUNDRED = Decimal("100")


def _same_month(day: date, today: date) -> bool:
    return day.year == today.year and day.month == today.month


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """Share of ``part`` in ``whole`` as a percentage, 0 when ``whole`` is 0."""
    if whole == 0:
        return Decimal("0")
    return part / whole * HUNDRED


def top_expense_categories(
    expenses: Iterable[Expense], total_expenses: Decimal, limit: int = TOP_CATEGORY_LIMIT
) -> list[CategoryTotal]:
    """Largest expense categories by total, with their share of all expenses."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: dict[str, int] = defaultdict(int)
    for expense in expenses:
        totals[expense.category] += expense.amount
        counts[expense.category] += 1

    # sorted() is stable, so equal totals keep first-seen order
    ranked = sorted(totals.items(), key=lambda entry: entry[1], reverse=True)[:limit]
    return [
        CategoryTotal(
            category=category,
            total=total,
            count=counts[category],
            percentage=percentage_of(total, total_expenses),
        )
        for category, total in ranked
    ]


def recent_transactions(
    payments_received: Iterable[Payment],
    expenses: Iterable[Expense],
    invoice_numbers: dict[int, str],
    per_source: int = RECENT_PER_SOURCE,
    limit: int = RECENT_TRANSACTION_LIMIT,
) -> list[RecentTransaction]:
    """Latest received payments and expenses merged into one feed, newest first."""
    latest_payments = sorted(payments_received, key=lambda p: (p.paid_on, p.id), reverse=True)
    latest_expenses = sorted(expenses, key=lambda e: (e.spent_on, e.id), reverse=True)

    entries = [
        RecentTransaction(
            date=payment.paid_on,
            amount=payment.amount,
            type=TransactionType.INCOME,
            description=f"Payment for invoice {invoice_numbers.get(payment.invoice_id, '')}".rstrip(),
        )
        for payment in latest_payments[:per_source]
    ]
    entries.extend(
        RecentTransaction(
            date=expense.spent_on,
            amount=expense.amount,
            type=TransactionType.EXPENSE,
            description=expense.description,
        )
        for expense in latest_expenses[:per_source]
    )
    entries.sort(key=lambda entry: entry.date, reverse=True)
    return entries[:limit]


def build_financial_summary(
    sales_invoices: Sequence[Invoice],
    expenses: Sequence[Expense],
    payments_received: Sequence[Payment],
    today: date,
) -> FinancialSummary:
    """Compute the financial report from sales invoices, expenses and received payments.

    Income is recognized on paid sales invoices by their issue date; the
    monthly figures cover the calendar month of ``today``.

    Args:
        sales_invoices: All sales invoices
        expenses: All expenses
        payments_received: Payments recorded against sales invoices
        today: Reference date for the monthly figures

    Returns:
        FinancialSummary
    """
    paid = [inv for inv in sales_invoices if inv.status is InvoiceStatus.PAID]
    pending = [inv for inv in sales_invoices if inv.status is InvoiceStatus.PENDING]

    total_income = sum((inv.total_amount for inv in paid), ZERO)
    monthly_income = sum(
        (inv.total_amount for inv in paid if _same_month(inv.issue_date, today)), ZERO
    )
    total_expenses = sum((exp.amount for exp in expenses), ZERO)
    monthly_expenses = sum(
        (exp.amount for exp in expenses if _same_month(exp.spent_on, today)), ZERO
    )
    net_profit = total_income - total_expenses

    return FinancialSummary(
        total_income=total_income,
        monthly_income=monthly_income,
        total_expenses=total_expenses,
        monthly_expenses=monthly_expenses,
        net_profit=net_profit,
        monthly_profit=monthly_income - monthly_expenses,
        pending_receivables=sum((inv.total_amount - inv.paid_amount for inv in pending), ZERO),
        net_margin=percentage_of(net_profit, total_income),
        top_expense_categories=tuple(top_expense_categories(expenses, total_expenses)),
        recent_transactions=tuple(
            recent_transactions(
                payments_received,
                expenses,
                {inv.id: inv.number for inv in sales_invoices},
            )
        ),
        total_sales_invoices=len(sales_invoices),
        total_expense_records=len(expenses),
    )


class ReportService:
    """Service for building the financial report."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_financial_summary(self, today: Optional[date] = None) -> FinancialSummary:
        """Fetch current data and compute the financial summary.

        Args:
            today: Reference date for monthly figures (defaults to today)
        """
        return build_financial_summary(
            sales_invoices=self.db.list_invoices(direction=InvoiceDirection.SALES),
            expenses=self.db.list_expenses(),
            payments_received=self.db.list_payments(direction=InvoiceDirection.SALES),
            today=today or date.today(),
        )
