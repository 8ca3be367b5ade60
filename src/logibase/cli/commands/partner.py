"""Customer, supplier and vendor commands.

The three groups share one set of commands, built per kind by
``make_partner_group``.
"""

import dataclasses
import json

import click
from logibase.cli.error_handling import handle_domain_error, load_payload
from logibase.domain.entities import PartnerAggregate, PartnerKind, StatusActive
from logibase.domain.errors import DomainError
from logibase.domain.schemas import kind_spec
from logibase.domain.partner import PartnerService


def _yes_no(flag: bool) -> str:
    return "*" if flag else " "


def _region_line(address) -> str:
    parts = [
        address.district_name or address.district_code,
        address.regency_name or address.regency_code,
        address.province_name or address.province_code,
        address.country_name or address.country_code,
    ]
    return ", ".join(p for p in parts if p)


def echo_aggregate(aggregate: PartnerAggregate) -> None:
    """Print an aggregate in human-readable form."""
    p = aggregate.partner
    click.echo(f"\n{p.kind.value.capitalize()} {p.code} (ID: {p.id})")
    click.echo("-" * 60)
    click.echo(f"Name:    {p.name}")
    click.echo(f"Status:  {p.status}")
    if p.partner_type:
        click.echo(f"Type:    {p.partner_type}")
    if p.tax_number:
        click.echo(f"Tax:     {p.tax_number} {p.tax_name or ''}".rstrip())
    if p.payment_terms is not None:
        click.echo(f"Terms:   {p.payment_terms} days")
    if p.pic_name:
        click.echo(f"PIC:     {p.pic_name} {f'({p.pic_position})' if p.pic_position else ''}".rstrip())
    if p.notes:
        click.echo(f"Notes:   {p.notes}")

    click.echo("\nAddresses (* = primary):")
    for a in aggregate.addresses:
        click.echo(
            f"  [{_yes_no(a.is_primary_address)}] ID: {a.id:3d} | {a.address_type:11s} | "
            f"{a.address_line1} | {_region_line(a)}"
        )
    click.echo("\nContacts (* = primary):")
    for c in aggregate.contacts:
        click.echo(
            f"  [{_yes_no(c.is_primary_contact)}] ID: {c.id:3d} | {c.contact_type:9s} | "
            f"{c.name} | {c.phone_number}"
        )
    if p.kind == PartnerKind.VENDOR:
        click.echo("\nBank accounts (* = primary):")
        for b in aggregate.bankings:
            click.echo(
                f"  [{_yes_no(b.is_primary_banking_number)}] ID: {b.id:3d} | {b.banking_bank:11s} | "
                f"{b.banking_number} | {b.banking_name}"
            )


def make_partner_group(kind: PartnerKind) -> click.Group:
    """Build the command group for one aggregate kind."""
    spec = kind_spec(kind)
    label = kind.value
    collections = click.Choice(list(spec.collections))

    @click.group(name=label, help=f"Manage {label}s.")
    def group():
        pass

    @group.command("create")
    @click.argument("payload_file", metavar="FILE", type=click.File("r"))
    @click.pass_context
    def create(ctx, payload_file):
        """Create a record from a JSON file (use - for stdin).

        The code is generated; any code in the file is ignored. The file may
        hold addresses, contacts and, for vendors, bankings lists.
        """
        service = PartnerService(ctx.obj["db"])
        payload = load_payload(ctx, payload_file)

        try:
            aggregate = service.create_aggregate(kind, payload, created_by=ctx.obj.get("user"))
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Created {label} {aggregate.partner.code} (ID: {aggregate.partner.id})")

    @group.command("update")
    @click.argument("aggregate_id", metavar="ID", type=int)
    @click.argument("payload_file", metavar="FILE", type=click.File("r"))
    @click.pass_context
    def update(ctx, aggregate_id: int, payload_file):
        """Update a record and its children from a JSON file.

        Only fields present in the file are changed. Children with an "id"
        are patched; children without one are added.
        """
        service = PartnerService(ctx.obj["db"])
        payload = load_payload(ctx, payload_file)

        try:
            aggregate = service.update_aggregate(kind, aggregate_id, payload)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Updated {label} {aggregate.partner.code} (ID: {aggregate_id})")

    @group.command("show")
    @click.argument("aggregate_id", metavar="ID", type=int)
    @click.option("--json", "as_json", is_flag=True, help="Print the record as JSON")
    @click.pass_context
    def show(ctx, aggregate_id: int, as_json: bool):
        """Show a record with all addresses, contacts and bank accounts."""
        service = PartnerService(ctx.obj["db"])
        try:
            aggregate = service.get_aggregate(kind, aggregate_id)
        except DomainError as e:
            handle_domain_error(ctx, e)

        if as_json:
            click.echo(json.dumps(dataclasses.asdict(aggregate), indent=2, default=str))
        else:
            echo_aggregate(aggregate)

    @group.command("list")
    @click.option("--search", help="Match on name or code (case-insensitive)")
    @click.option("--status", type=click.Choice([s.value for s in StatusActive]))
    @click.option("--type", "partner_type", help=f"Only {label}s of this type")
    @click.option("--page", type=int, default=1, show_default=True)
    @click.option("--limit", type=int, default=10, show_default=True)
    @click.pass_context
    def list_(ctx, search, status, partner_type, page: int, limit: int):
        """List records, newest first."""
        service = PartnerService(ctx.obj["db"])
        try:
            result = service.list_aggregates(
                kind, search=search, status=status, partner_type=partner_type, page=page, limit=limit
            )
        except DomainError as e:
            handle_domain_error(ctx, e)

        if not result.items:
            click.echo(f"No {label}s found.")
            return

        click.echo(f"\n{label.capitalize()}s:")
        click.echo("-" * 60)
        for p in result.items:
            click.echo(f"ID: {p.id:3d} | {p.code:9s} | {p.name:25s} | {p.status}")
        click.echo(f"\nPage {result.page} of {result.total_pages} ({result.total} total)")

    @group.command("delete")
    @click.argument("aggregate_id", metavar="ID", type=int)
    @click.option("--yes", is_flag=True, help="Do not ask for confirmation")
    @click.pass_context
    def delete(ctx, aggregate_id: int, yes: bool):
        """Delete a record together with all of its children."""
        service = PartnerService(ctx.obj["db"])
        try:
            aggregate = service.get_aggregate(kind, aggregate_id)
        except DomainError as e:
            handle_domain_error(ctx, e)

        p = aggregate.partner
        if not yes and not click.confirm(f"Are you sure you want to delete {label} '{p.name}' ({p.code})?"):
            click.echo("Deletion cancelled.")
            return

        try:
            service.delete_aggregate(kind, aggregate_id)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Deleted {label} '{p.name}'")

    @group.command("set-primary")
    @click.argument("aggregate_id", metavar="ID", type=int)
    @click.argument("collection", type=collections)
    @click.argument("child_id", type=int)
    @click.pass_context
    def set_primary(ctx, aggregate_id: int, collection: str, child_id: int):
        """Make one address, contact or bank account the primary one."""
        service = PartnerService(ctx.obj["db"])
        try:
            service.set_primary_child(kind, aggregate_id, collection, child_id)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Set {spec.collection(collection).label} {child_id} as primary")

    @group.command("remove-child")
    @click.argument("aggregate_id", metavar="ID", type=int)
    @click.argument("collection", type=collections)
    @click.argument("child_id", type=int)
    @click.option("--yes", is_flag=True, help="Do not ask for confirmation")
    @click.pass_context
    def remove_child(ctx, aggregate_id: int, collection: str, child_id: int, yes: bool):
        """Remove one address, contact or bank account.

        If it was the primary one, the oldest remaining entry becomes primary.
        The last entry of a collection cannot be removed.
        """
        service = PartnerService(ctx.obj["db"])
        child_label = spec.collection(collection).label
        try:
            aggregate = service.get_aggregate(kind, aggregate_id)
        except DomainError as e:
            handle_domain_error(ctx, e)

        members = aggregate.collection(collection)
        if len(members) == 1 and members[0].id == child_id:
            click.echo(
                f"Error: Cannot remove the only {child_label} of {label} {aggregate.partner.code}",
                err=True,
            )
            ctx.exit(1)

        if not yes and not click.confirm(f"Are you sure you want to remove {child_label} {child_id}?"):
            click.echo("Removal cancelled.")
            return

        try:
            service.remove_child(kind, aggregate_id, collection, child_id)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Removed {child_label} {child_id}")

    return group


def register_commands(cli):
    """Register customer, supplier and vendor commands with main CLI."""
    for kind in PartnerKind:
        cli.add_command(make_partner_group(kind))
