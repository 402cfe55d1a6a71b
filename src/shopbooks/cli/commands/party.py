"""Customer and supplier commands."""

import click
from shopbooks.cli.error_handling import handle_domain_error
from shopbooks.domain.entities import PartyKind
from shopbooks.domain.invoice import InvoiceService
from shopbooks.utils.resolvers import resolve_party


def build_party_group(kind: PartyKind) -> click.Group:
    """Build the command group for customers or suppliers."""
    label = "customer" if kind is PartyKind.CUSTOMER else "supplier"

    @click.group(help=f"Manage {label}s.")
    def party_group():
        pass

    @party_group.command("create", help=f"Create a new {label}.")
    @click.argument("name")
    @click.option("--email")
    @click.option("--phone")
    @click.option("--address")
    @click.pass_context
    def create_party(ctx, name: str, email: str | None, phone: str | None, address: str | None):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        try:
            party_id = service.create_party(kind, name, email=email, phone=phone, address=address)
            click.echo(f"Created {label} '{name}' (ID: {party_id})")
        except ValueError as e:
            handle_domain_error(ctx, e)

    @party_group.command("list", help=f"List all {label}s.")
    @click.pass_context
    def list_parties(ctx):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        parties = service.list_parties(kind)
        if not parties:
            click.echo(f"No {label}s found.")
            return

        click.echo(f"\n{label.capitalize()}s:")
        click.echo("-" * 70)
        for p in parties:
            click.echo(f"ID: {p.id:3d} | {p.name:25s} | {p.email or '':25s} | {p.phone or ''}")

    @party_group.command("update", help=f"Update a {label}'s contact fields (by name or ID).")
    @click.argument("party", metavar=label.upper())
    @click.option("--name")
    @click.option("--email")
    @click.option("--phone")
    @click.option("--address")
    @click.pass_context
    def update_party(
        ctx, party: str, name: str | None, email: str | None, phone: str | None, address: str | None
    ):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        try:
            party_id = resolve_party(service, party, kind)
            service.update_party(party_id, name=name, email=email, phone=phone, address=address)
        except ValueError as e:
            handle_domain_error(ctx, e)

    @party_group.command("delete", help=f"Delete a {label} without invoices (by name or ID).")
    @click.argument("party", metavar=label.upper())
    @click.pass_context
    def delete_party(ctx, party: str):
        service = InvoiceService(ctx.obj["db"], ctx.obj["notifier"])
        try:
            party_id = resolve_party(service, party, kind)
            service.delete_party(party_id)
        except ValueError as e:
            handle_domain_error(ctx, e)

    return party_group


def register_commands(cli):
    """Register customer and supplier commands with main CLI."""
    cli.add_command(build_party_group(PartyKind.CUSTOMER), name="customer")
    cli.add_command(build_party_group(PartyKind.SUPPLIER), name="supplier")
