"""Stock movement commands."""

import click
from shopbooks.cli.error_handling import handle_domain_error
from shopbooks.domain.entities import MovementKind
from shopbooks.domain.inventory import InventoryService
from shopbooks.utils.resolvers import resolve_product


@click.group()
def movement_group():
    """Post and review stock movements."""
    pass


@movement_group.command("add")
@click.argument("product", metavar="PRODUCT")
@click.argument("kind", type=click.Choice(["in", "out"], case_sensitive=False))
@click.argument("quantity", type=click.IntRange(min=1))
@click.option("--note", help="Free-text note")
@click.pass_context
def add_movement(ctx, product: str, kind: str, quantity: int, note: str | None):
    """Post an IN or OUT movement.

    PRODUCT can be a SKU or ID. OUT movements larger than the current
    stock are rejected.

    Examples:
        shopbooks movement add CAB-01 in 5 --note "Restock"
        shopbooks movement add CAB-01 out 2
    """
    service = InventoryService(ctx.obj["db"], ctx.obj["notifier"])
    try:
        product_id = resolve_product(service, product)
        updated, movement = service.apply_movement(
            product_id, MovementKind(kind.upper()), quantity, note
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"{updated.sku}: {movement.quantity_before} -> {movement.quantity_after} "
        f"(movement ID: {movement.id})"
    )


@movement_group.command("list")
@click.option("--product", help="Only movements of this SKU or ID")
@click.option("--limit", type=click.IntRange(min=1), default=10, show_default=True)
@click.pass_context
def list_movements(ctx, product: str | None, limit: int):
    """Show recent movements, newest first."""
    service = InventoryService(ctx.obj["db"], ctx.obj["notifier"])

    product_id = None
    if product is not None:
        try:
            product_id = resolve_product(service, product)
        except ValueError as e:
            handle_domain_error(ctx, e)

    movements = service.list_movements(product_id=product_id, limit=limit)
    if not movements:
        click.echo("No movements found.")
        return

    names = {p.id: p.name for p in service.list_products()}
    click.echo("\nRecent movements:")
    click.echo("-" * 80)
    for m in movements:
        click.echo(
            f"{m.moved_at:%Y-%m-%d} | {names.get(m.product_id, 'N/A'):25s} | {m.kind.value:3s} "
            f"{m.quantity:5d} | {m.quantity_before:5d} -> {m.quantity_after:5d} | {m.note or ''}"
        )


def register_commands(cli):
    """Register movement commands with main CLI."""
    cli.add_command(movement_group, name="movement")
