"""Expense commands."""

import click
from shopbooks.cli.date_filters import period_options, resolve_cli_date_range
from shopbooks.cli.error_handling import handle_domain_error
from shopbooks.cli.formatting import format_money
from shopbooks.domain.entities import EXPENSE_CATEGORIES
from shopbooks.domain.expense import ExpenseService
from shopbooks.utils.amount_parser import parse_amount
from shopbooks.utils.date_parser import parse_date


@click.group()
def expense_group():
    """Log and review operating expenses."""
    pass


@expense_group.command("add")
@click.argument("description")
@click.argument("amount")
@click.option("--category", type=click.Choice(EXPENSE_CATEGORIES), required=True)
@click.option("--date", "spent_on", default="today", show_default=True, help="Expense date")
@click.pass_context
def add_expense(ctx, description: str, amount: str, category: str, spent_on: str):
    """Log an expense.

    Examples:
        shopbooks expense add "Courier" 150 --category Transporte
        shopbooks expense add "Router" 49.90 --category Tecnología --date yesterday
    """
    service = ExpenseService(ctx.obj["db"], ctx.obj["notifier"])
    try:
        expense_id = service.create_expense(
            spent_on=parse_date(spent_on),
            description=description,
            category=category,
            amount=parse_amount(amount),
        )
        click.echo(f"Created expense {expense_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@expense_group.command("list")
@period_options
@click.option("--category", type=click.Choice(EXPENSE_CATEGORIES), help="Only this category")
@click.pass_context
def list_expenses(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_month: bool,
    this_year: bool,
    last_year: bool,
    category: str | None,
):
    """List expenses, most recent first."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "last-month": last_month,
            "this-year": this_year,
            "last-year": last_year,
        },
    )
    service = ExpenseService(ctx.obj["db"], ctx.obj["notifier"])
    expenses = service.list_expenses(start_date=start, end_date=end, category=category)
    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo("\nExpenses:")
    click.echo("-" * 80)
    for e in expenses:
        click.echo(
            f"ID: {e.id:3d} | {e.spent_on} | {e.category:15s} | {e.description:30s} | "
            f"{format_money(e.amount):>12s}"
        )
    total = sum(e.amount for e in expenses)
    click.echo("-" * 80)
    click.echo(f"Total: {format_money(total)}")


@expense_group.command("update")
@click.argument("expense_id", type=int)
@click.option("--description")
@click.option("--amount")
@click.option("--category", type=click.Choice(EXPENSE_CATEGORIES))
@click.option("--date", "spent_on", help="Expense date")
@click.pass_context
def update_expense(
    ctx,
    expense_id: int,
    description: str | None,
    amount: str | None,
    category: str | None,
    spent_on: str | None,
):
    """Update an expense's fields."""
    service = ExpenseService(ctx.obj["db"], ctx.obj["notifier"])
    try:
        service.update_expense(
            expense_id,
            spent_on=parse_date(spent_on) if spent_on else None,
            description=description,
            category=category,
            amount=parse_amount(amount) if amount is not None else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.pass_context
def delete_expense(ctx, expense_id: int):
    """Delete an expense."""
    service = ExpenseService(ctx.obj["db"], ctx.obj["notifier"])
    try:
        service.delete_expense(expense_id)
    except ValueError as e:
        handle_domain_error(ctx, e)


@expense_group.command("categories")
@click.pass_context
def expense_categories(ctx):
    """Show the total and count of every expense category."""
    service = ExpenseService(ctx.obj["db"], ctx.obj["notifier"])
    for entry in service.summarize_by_category():
        click.echo(f"{entry.category:20s} {format_money(entry.total):>14s} ({entry.count})")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
