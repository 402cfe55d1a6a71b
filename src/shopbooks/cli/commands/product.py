"""Product management commands."""

import click
from shopbooks.cli.error_handling import handle_domain_error
from shopbooks.domain.inventory import DEFAULT_LOW_STOCK_THRESHOLD, InventoryService
from shopbooks.utils.resolvers import resolve_product

LOW_STOCK_ENV_VAR = "SHOPBOOKS_LOW_STOCK_THRESHOLD"


@click.group()
def product_group():
    """Manage products."""
    pass


@product_group.command("create")
@click.argument("sku")
@click.argument("name")
@click.option("--description", help="Product description")
@click.option("--quantity", type=click.IntRange(min=0), default=0, show_default=True,
              help="Opening stock")
@click.pass_context
def create_product(ctx, sku: str, name: str, description: str | None, quantity: int):
    """Create a new product.

    Examples:
        shopbooks product create CAB-01 "HDMI cable" --quantity 10
    """
    service = InventoryService(ctx.obj["db"], ctx.obj["notifier"])
    try:
        product_id = service.create_product(
            sku=sku, name=name, description=description, initial_quantity=quantity
        )
        click.echo(f"Created product '{sku}' (ID: {product_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@product_group.command("list")
@click.pass_context
def list_products(ctx):
    """List all products with their current stock."""
    service = InventoryService(ctx.obj["db"], ctx.obj["notifier"])

    products = service.list_products()
    if not products:
        click.echo("No products found.")
        return

    click.echo("\nProducts:")
    click.echo("-" * 70)
    for p in products:
        click.echo(f"ID: {p.id:3d} | {p.sku:12s} | {p.name:30s} | Stock: {p.current_quantity:5d}")


@product_group.command("update")
@click.argument("product", metavar="PRODUCT")
@click.option("--sku", help="New SKU")
@click.option("--name", help="New name")
@click.option("--description", help="New description")
@click.pass_context
def update_product(ctx, product: str, sku: str | None, name: str | None, description: str | None):
    """Update a product's SKU, name or description.

    PRODUCT can be a SKU or ID. Stock is changed with 'movement add' or
    'product correct', never here.
    """
    service = InventoryService(ctx.obj["db"], ctx.obj["notifier"])
    try:
        product_id = resolve_product(service, product)
        service.update_product(product_id, sku=sku, name=name, description=description)
    except ValueError as e:
        handle_domain_error(ctx, e)


@product_group.command("delete")
@click.argument("product", metavar="PRODUCT")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_product(ctx, product: str, yes: bool):
    """Delete a product without stock history.

    PRODUCT can be a SKU or ID.
    """
    service = InventoryService(ctx.obj["db"], ctx.obj["notifier"])
    try:
        product_id = resolve_product(service, product)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete product {product}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_product(product_id)
    except ValueError as e:
        handle_domain_error(ctx, e)


@product_group.command("correct")
@click.argument("product", metavar="PRODUCT")
@click.argument("counted", type=click.IntRange(min=0))
@click.option("--note", help="Reason for the correction")
@click.pass_context
def correct_product(ctx, product: str, counted: int, note: str | None):
    """Set stock to a physically counted quantity.

    The difference is posted as a stock movement.
    """
    service = InventoryService(ctx.obj["db"], ctx.obj["notifier"])
    try:
        product_id = resolve_product(service, product)
        result = service.correct_quantity(product_id, counted, note)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if result is None:
        click.echo("Stock already matches the counted quantity.")


@product_group.command("summary")
@click.option("--threshold", type=click.IntRange(min=0), default=DEFAULT_LOW_STOCK_THRESHOLD,
              envvar=LOW_STOCK_ENV_VAR, show_default=True,
              help=f"Low stock threshold (overrides ${LOW_STOCK_ENV_VAR})")
@click.pass_context
def product_summary(ctx, threshold: int):
    """Show stock totals and low-stock products."""
    service = InventoryService(ctx.obj["db"], ctx.obj["notifier"])
    summary = service.get_inventory_summary(low_stock_threshold=threshold)

    click.echo(f"Total products: {summary.total_products}")
    click.echo(f"Total stock:    {summary.total_stock}")
    click.echo(f"Low stock (<= {summary.low_stock_threshold}): {len(summary.low_stock_products)}")
    for p in summary.low_stock_products:
        click.echo(f"  {p.sku:12s} {p.name:30s} {p.current_quantity:5d}")


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
