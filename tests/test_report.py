"""Tests for the financial report aggregation."""

from datetime import date, datetime, timedelta
from decimal import Decimal

from shopbooks.domain.entities import (
    Expense,
    Invoice,
    InvoiceDirection,
    InvoiceStatus,
    LineItemInput,
    Payment,
    TransactionType,
)
from shopbooks.domain.report import (
    build_financial_summary,
    percentage_of,
    recent_transactions,
    top_expense_categories,
)

TODAY = date(2024, 3, 20)
CREATED = datetime(2024, 1, 1)


def _invoice(invoice_id, total, paid, issued, number=None):
    total = Decimal(total)
    paid = Decimal(paid)
    return Invoice(
        id=invoice_id,
        direction=InvoiceDirection.SALES,
        number=number or f"F-{invoice_id}",
        party_id=1,
        issue_date=issued,
        due_date=None,
        payment_method="Efectivo",
        description=None,
        total_amount=total,
        paid_amount=paid,
        status=InvoiceStatus.derive(paid, total),
        created_at=CREATED,
    )


def _expense(expense_id, amount, category, spent_on, description=None):
    return Expense(
        id=expense_id,
        spent_on=spent_on,
        description=description or f"Expense {expense_id}",
        category=category,
        amount=Decimal(amount),
        created_at=CREATED,
    )


def _payment(payment_id, invoice_id, amount, paid_on):
    return Payment(
        id=payment_id,
        invoice_id=invoice_id,
        amount=Decimal(amount),
        paid_on=paid_on,
        note=None,
        created_at=CREATED,
    )


def test_percentage_of_zero_whole_is_zero():
    assert percentage_of(Decimal("50"), Decimal("0")) == 0
    assert percentage_of(Decimal("1"), Decimal("4")) == Decimal("25")


def test_empty_books_give_zero_summary():
    summary = build_financial_summary([], [], [], TODAY)

    assert summary.total_income == 0
    assert summary.monthly_income == 0
    assert summary.total_expenses == 0
    assert summary.net_profit == 0
    assert summary.pending_receivables == 0
    assert summary.net_margin == 0
    assert summary.top_expense_categories == ()
    assert summary.recent_transactions == ()


def test_summary_figures():
    invoices = [
        _invoice(1, "100", "100", date(2024, 3, 5)),
        _invoice(2, "200", "200", date(2024, 2, 10)),
        _invoice(3, "80", "30", date(2024, 3, 1)),
    ]
    expenses = [
        _expense(1, "150", "Transporte", date(2024, 3, 2)),
        _expense(2, "50", "Tecnología", date(2024, 1, 15)),
    ]

    summary = build_financial_summary(invoices, expenses, [], TODAY)

    # Only paid invoices count as income
    assert summary.total_income == Decimal("300")
    assert summary.monthly_income == Decimal("100")
    assert summary.total_expenses == Decimal("200")
    assert summary.monthly_expenses == Decimal("150")
    assert summary.net_profit == Decimal("100")
    assert summary.monthly_profit == Decimal("-50")
    assert summary.pending_receivables == Decimal("50")
    assert round(summary.net_margin, 2) == Decimal("33.33")
    assert summary.total_sales_invoices == 3
    assert summary.total_expense_records == 2


def test_monthly_figures_ignore_same_month_of_other_years():
    invoices = [_invoice(1, "100", "100", date(2023, 3, 5))]
    expenses = [_expense(1, "10", "Otros", date(2023, 3, 5))]

    summary = build_financial_summary(invoices, expenses, [], TODAY)

    assert summary.monthly_income == 0
    assert summary.monthly_expenses == 0
    assert summary.total_income == Decimal("100")


def test_net_margin_is_zero_without_income():
    expenses = [_expense(1, "40", "Otros", date(2024, 3, 1))]
    summary = build_financial_summary([_invoice(1, "90", "0", date(2024, 3, 1))], expenses, [], TODAY)

    assert summary.net_profit == Decimal("-40")
    assert summary.net_margin == 0


def test_top_categories_share_of_total():
    expenses = [
        _expense(1, "100", "Transporte", date(2024, 3, 1)),
        _expense(2, "50", "Tecnología", date(2024, 3, 2)),
        _expense(3, "50", "Transporte", date(2024, 3, 3)),
    ]

    top = top_expense_categories(expenses, Decimal("200"))

    assert [(c.category, c.total, c.count) for c in top] == [
        ("Transporte", Decimal("150"), 2),
        ("Tecnología", Decimal("50"), 1),
    ]
    assert top[0].percentage == Decimal("75")
    assert top[1].percentage == Decimal("25")


def test_top_categories_limited_to_five_largest():
    categories = ["Otros", "Seguros", "Impuestos", "Transporte", "Alimentación", "Mantenimiento", "Tecnología"]
    expenses = [
        _expense(i, str((i + 1) * 10), category, date(2024, 3, 1))
        for i, category in enumerate(categories)
    ]
    total = sum(e.amount for e in expenses)

    top = top_expense_categories(expenses, total)

    assert [c.category for c in top] == [
        "Tecnología",
        "Mantenimiento",
        "Alimentación",
        "Transporte",
        "Impuestos",
    ]


def test_top_categories_ties_keep_first_seen_order():
    expenses = [
        _expense(1, "20", "Seguros", date(2024, 3, 1)),
        _expense(2, "20", "Impuestos", date(2024, 3, 1)),
    ]
    top = top_expense_categories(expenses, Decimal("40"))
    assert [c.category for c in top] == ["Seguros", "Impuestos"]


def test_recent_transactions_merge_latest_of_each_source():
    start = date(2024, 3, 1)
    payments = [_payment(i, 1, "10", start + timedelta(days=2 * i)) for i in range(1, 7)]
    expenses = [
        _expense(i, "5", "Otros", start + timedelta(days=2 * i + 1), description=f"Fuel {i}")
        for i in range(1, 7)
    ]

    feed = recent_transactions(payments, expenses, {1: "F-7"})

    assert len(feed) == 10
    assert [t.date for t in feed] == sorted((t.date for t in feed), reverse=True)
    # The oldest entry of each source is dropped
    assert start + timedelta(days=2) not in [t.date for t in feed]
    assert start + timedelta(days=3) not in [t.date for t in feed]

    newest = feed[0]
    assert newest.type is TransactionType.EXPENSE
    assert newest.description == "Fuel 6"
    income = [t for t in feed if t.type is TransactionType.INCOME]
    assert len(income) == 5
    assert income[0].description == "Payment for invoice F-7"


def test_recent_transactions_with_one_source():
    payments = [_payment(1, 3, "25", date(2024, 3, 1))]
    feed = recent_transactions(payments, [], {3: "F-3"})

    assert len(feed) == 1
    assert feed[0].amount == Decimal("25")
    assert feed[0].type is TransactionType.INCOME


class TestReportService:
    def test_summary_from_recorded_books(
        self, report_service, invoice_service, expense_service, sample_customer, sample_product
    ):
        invoice_id = invoice_service.create_invoice(
            direction=InvoiceDirection.SALES,
            number="F-10",
            party_id=sample_customer.id,
            issue_date=date(2024, 3, 5),
            line_items=[LineItemInput(sample_product.id, 2, Decimal("50"))],
        )
        invoice_service.create_invoice(
            direction=InvoiceDirection.SALES,
            number="F-11",
            party_id=sample_customer.id,
            issue_date=date(2024, 3, 6),
            total_amount="40",
        )
        invoice_service.record_payment(invoice_id, "100", date(2024, 3, 7))
        expense_service.create_expense(date(2024, 3, 8), "Courier", "Transporte", "150")
        expense_service.create_expense(date(2024, 3, 9), "Mouse", "Tecnología", "50")

        summary = report_service.get_financial_summary(today=TODAY)

        assert summary.total_income == Decimal("100")
        assert summary.total_expenses == Decimal("200")
        assert summary.net_profit == Decimal("-100")
        assert summary.pending_receivables == Decimal("40")
        assert summary.net_margin == Decimal("-100")
        assert [(c.category, c.percentage) for c in summary.top_expense_categories] == [
            ("Transporte", Decimal("75")),
            ("Tecnología", Decimal("25")),
        ]
        assert [t.description for t in summary.recent_transactions] == [
            "Mouse",
            "Courier",
            "Payment for invoice F-10",
        ]

    def test_purchase_invoices_are_not_income(
        self, report_service, invoice_service, sample_supplier
    ):
        invoice_id = invoice_service.create_invoice(
            direction=InvoiceDirection.PURCHASE,
            number="P-1",
            party_id=sample_supplier.id,
            issue_date=date(2024, 3, 5),
            total_amount="75",
        )
        invoice_service.record_payment(invoice_id, "75", date(2024, 3, 6))

        summary = report_service.get_financial_summary(today=TODAY)

        assert summary.total_income == 0
        assert summary.pending_receivables == 0
        assert summary.recent_transactions == ()
