"""Financial report command."""

import click
from shopbooks.cli.error_handling import handle_domain_error
from shopbooks.cli.formatting import format_money, format_percent
from shopbooks.domain.entities import TransactionType
from shopbooks.domain.report import ReportService
from shopbooks.utils.date_parser import parse_date


@click.command("report")
@click.option("--as-of", help="Reference date for the monthly figures (default: today)")
@click.pass_context
def report(ctx, as_of: str | None):
    """Show income, expenses, profit and receivables.

    Income counts paid sales invoices; the monthly figures cover the
    calendar month of the reference date.
    """
    today = None
    if as_of:
        try:
            today = parse_date(as_of)
        except ValueError as e:
            handle_domain_error(ctx, e)

    summary = ReportService(ctx.obj["db"]).get_financial_summary(today=today)

    click.echo(f"{'':22s} {'Total':>14s} {'This month':>14s}")
    click.echo("-" * 52)
    click.echo(
        f"{'Income':22s} {format_money(summary.total_income):>14s} "
        f"{format_money(summary.monthly_income):>14s}"
    )
    click.echo(
        f"{'Expenses':22s} {format_money(summary.total_expenses):>14s} "
        f"{format_money(summary.monthly_expenses):>14s}"
    )
    click.echo(
        f"{'Net profit':22s} {format_money(summary.net_profit):>14s} "
        f"{format_money(summary.monthly_profit):>14s}"
    )
    click.echo("-" * 52)
    click.echo(f"{'Pending receivables':22s} {format_money(summary.pending_receivables):>14s}")
    click.echo(f"{'Net margin':22s} {format_percent(summary.net_margin):>14s}")
    click.echo(f"{'Sales invoices':22s} {summary.total_sales_invoices:>14d}")
    click.echo(f"{'Expense records':22s} {summary.total_expense_records:>14d}")

    if summary.top_expense_categories:
        click.echo("\nTop expense categories:")
        for entry in summary.top_expense_categories:
            click.echo(
                f"  {entry.category:25s} {format_money(entry.total):>14s} "
                f"{format_percent(entry.percentage):>7s}"
            )

    if summary.recent_transactions:
        click.echo("\nRecent transactions:")
        for txn in summary.recent_transactions:
            sign = "+" if txn.type is TransactionType.INCOME else "-"
            click.echo(f"  {txn.date} {sign}{format_money(txn.amount):>14s}  {txn.description}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
