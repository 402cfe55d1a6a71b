"""Sales and purchase invoice commands."""

from datetime import date

import click
from shopbooks.cli.error_handling import handle_domain_error
from shopbooks.cli.formatting import format_money
from shopbooks.domain.entities import (
    DEFAULT_PAYMENT_METHOD,
    PAYMENT_METHODS,
    InvoiceDirection,
    InvoiceStatus,
)
from shopbooks.domain.invoice import InvoiceService
from shopbooks.utils.amount_parser import parse_amount
from shopbooks.utils.date_parser import parse_date
from shopbooks.utils.line_items import parse_line_item
from shopbooks.utils.resolvers import resolve_party


def _parse_optional_date(ctx: click.Context, value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        handle_domain_error(ctx, e)


def _require_invoice_id(ctx, service: InvoiceService, direction: InvoiceDirection, number: str) -> int:
    invoice = service.get_invoice_by_number(direction, number)
    if invoice is None:
        handle_domain_error(ctx, ValueError(f"Invoice '{number}' not found"))
    return invoice.id


def build_invoice_group(direction: InvoiceDirection) -> click.Group:
    """Build the command group for sales or purchase invoices."""
    is_sales = direction is InvoiceDirection.SALES
    label = "sales" if is_sales else "purchase"
    party_label = "customer" if is_sales else "supplier"

    @click.group(help=f"Manage {label} invoices and their payments.")
    def invoice_group():
        pass

    @invoice_group.command(
        "create",
        help=(
            f"Create a {label} invoice.\n\n"
            "Give one or more --item PRODUCT:QUANTITY:UNIT_PRICE (PRODUCT is a SKU or ID) "
            "or a manual --total. Line items "
            + ("take stock out." if is_sales else "put stock in.")
        ),
    )
    @click.argument("number")
    @click.option(f"--{party_label}", "party", required=True, help=f"{party_label.capitalize()} name or ID")
    @click.option("--date", "issue_date", default="today", show_default=True, help="Issue date")
    @click.option("--due", help="Due date")
    @click.option("--item", "items", multiple=True, help="PRODUCT:QUANTITY:UNIT_PRICE")
    @click.option("--total", help="Manual total when there are no line items")
    @click.option("--method", type=click.Choice(PAYMENT_METHODS), default=DEFAULT_PAYMENT_METHOD,
                  show_default=True, help="Payment method")
    @click.option("--description", help="Free-text description")
    @click.pass_context
    def create_invoice(ctx, number, party, issue_date, due, items, total, method, description):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        try:
            party_id = resolve_party(service, party, direction.party_kind)
            line_items = [parse_line_item(spec, service.inventory) for spec in items]
            invoice_id = service.create_invoice(
                direction=direction,
                number=number,
                party_id=party_id,
                issue_date=parse_date(issue_date),
                line_items=line_items,
                total_amount=parse_amount(total) if total is not None else None,
                due_date=_parse_optional_date(ctx, due),
                payment_method=method,
                description=description,
            )
        except ValueError as e:
            handle_domain_error(ctx, e)
            return

        invoice = service.get_invoice(invoice_id)
        click.echo(f"Created {label} invoice '{number}' for {format_money(invoice.total_amount)}")

    @invoice_group.command("list", help=f"List {label} invoices.")
    @click.option("--pending", is_flag=True, help="Only invoices with a balance")
    @click.pass_context
    def list_invoices(ctx, pending: bool):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        invoices = service.list_invoices(
            direction=direction, status=InvoiceStatus.PENDING if pending else None
        )
        if not invoices:
            click.echo(f"No {label} invoices found.")
            return

        names = {p.id: p.name for p in service.list_parties(direction.party_kind)}
        click.echo(f"\n{label.capitalize()} invoices:")
        click.echo("-" * 100)
        for inv in invoices:
            click.echo(
                f"{inv.number:10s} | {inv.issue_date} | {names.get(inv.party_id, 'N/A'):20s} | "
                f"Total: {format_money(inv.total_amount):>12s} | "
                f"Paid: {format_money(inv.paid_amount):>12s} | "
                f"Balance: {format_money(inv.balance):>12s} | {inv.status.value}"
            )

    @invoice_group.command("show", help=f"Show a {label} invoice with its lines and payments.")
    @click.argument("number")
    @click.pass_context
    def show_invoice(ctx, number: str):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        invoice_id = _require_invoice_id(ctx, service, direction, number)
        invoice = service.get_invoice(invoice_id)
        party = service.get_party(invoice.party_id)

        click.echo(f"Invoice {invoice.number} ({label})")
        click.echo(f"{party_label.capitalize()}: {party.name if party else 'N/A'}")
        click.echo(f"Issued: {invoice.issue_date}  Due: {invoice.due_date or '-'}  Method: {invoice.payment_method}")
        if invoice.description:
            click.echo(f"Description: {invoice.description}")

        products = {p.id: p for p in service.inventory.list_products()}
        lines = service.list_line_items(invoice_id)
        if lines:
            click.echo("\nLines:")
            for line in lines:
                product = products.get(line.product_id)
                click.echo(
                    f"  {product.sku if product else 'N/A':12s} {line.quantity:5d} x "
                    f"{format_money(line.unit_price):>10s} = {format_money(line.subtotal):>12s}"
                )

        payments = service.list_payments(invoice_id=invoice_id)
        if payments:
            click.echo("\nPayments:")
            for payment in payments:
                click.echo(f"  {payment.paid_on} {format_money(payment.amount):>12s} {payment.note or ''}")

        click.echo(
            f"\nTotal: {format_money(invoice.total_amount)}  Paid: {format_money(invoice.paid_amount)}  "
            f"Balance: {format_money(invoice.balance)}  Status: {invoice.status.value}"
        )

    @invoice_group.command(
        "update",
        help=(
            f"Update a {label} invoice. Giving --item replaces all line items and "
            "posts the stock difference."
        ),
    )
    @click.argument("number")
    @click.option("--number", "new_number", help="New invoice number")
    @click.option(f"--{party_label}", "party", help=f"{party_label.capitalize()} name or ID")
    @click.option("--date", "issue_date", help="Issue date")
    @click.option("--due", help="Due date")
    @click.option("--item", "items", multiple=True, help="PRODUCT:QUANTITY:UNIT_PRICE")
    @click.option("--total", help="Manual total (invoices without line items only)")
    @click.option("--method", type=click.Choice(PAYMENT_METHODS), help="Payment method")
    @click.option("--description", help="Free-text description")
    @click.pass_context
    def update_invoice(ctx, number, new_number, party, issue_date, due, items, total, method, description):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        invoice_id = _require_invoice_id(ctx, service, direction, number)
        try:
            service.update_invoice(
                invoice_id,
                number=new_number,
                party_id=resolve_party(service, party, direction.party_kind) if party else None,
                issue_date=_parse_optional_date(ctx, issue_date),
                due_date=_parse_optional_date(ctx, due),
                payment_method=method,
                description=description,
                total_amount=parse_amount(total) if total is not None else None,
                line_items=[parse_line_item(spec, service.inventory) for spec in items] if items else None,
            )
        except ValueError as e:
            handle_domain_error(ctx, e)

    @invoice_group.command("delete", help=f"Delete a {label} invoice without payments.")
    @click.argument("number")
    @click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
    @click.pass_context
    def delete_invoice(ctx, number: str, yes: bool):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        invoice_id = _require_invoice_id(ctx, service, direction, number)
        if not yes and not click.confirm(f"Are you sure you want to delete invoice '{number}'?"):
            click.echo("Deletion cancelled.")
            return
        try:
            service.delete_invoice(invoice_id)
        except ValueError as e:
            handle_domain_error(ctx, e)

    @invoice_group.command(
        "pay",
        help=f"Record a payment {'received on' if is_sales else 'made against'} a {label} invoice.",
    )
    @click.argument("number")
    @click.argument("amount")
    @click.option("--date", "paid_on", default="today", show_default=True, help="Payment date")
    @click.option("--note", help="Free-text note")
    @click.pass_context
    def pay_invoice(ctx, number: str, amount: str, paid_on: str, note: str | None):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        invoice_id = _require_invoice_id(ctx, service, direction, number)
        try:
            invoice, _ = service.record_payment(
                invoice_id, parse_amount(amount), parse_date(paid_on), note
            )
        except ValueError as e:
            handle_domain_error(ctx, e)
            return

        click.echo(
            f"Invoice '{invoice.number}': paid {format_money(invoice.paid_amount)} of "
            f"{format_money(invoice.total_amount)} ({invoice.status.value})"
        )

    @invoice_group.command("summary", help=f"Show {'receivables' if is_sales else 'payables'} totals.")
    @click.pass_context
    def invoice_summary(ctx):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        summary = service.get_accounts_summary(direction)
        click.echo(f"{party_label.capitalize()}s:        {summary.party_count}")
        click.echo(f"Total {'collected' if is_sales else 'paid'}: {format_money(summary.total_paid)}")
        click.echo(f"Outstanding:      {format_money(summary.outstanding)}")
        click.echo(f"Pending invoices: {summary.pending_invoice_count}")

    return invoice_group


def register_commands(cli):
    """Register sales and purchase invoice commands with main CLI."""
    cli.add_command(build_invoice_group(InvoiceDirection.SALES), name="sale")
    cli.add_command(build_invoice_group(InvoiceDirection.PURCHASE), name="purchase")
