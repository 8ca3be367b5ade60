"""Country and region lookup commands."""

import click
from logibase.cli.error_handling import handle_domain_error
from logibase.domain.errors import DomainError
from logibase.domain.regions import REGION_LEVELS, RegionService


@click.group()
def region_group():
    """Manage countries and Indonesian regions."""
    pass


@region_group.command("import")
@click.argument("level", type=click.Choice(list(REGION_LEVELS)))
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_regions(ctx, level: str, csv_file: str):
    """Import lookup rows from a CSV file, updating rows by code.

    The file needs a header with code and name, plus province_code for
    regencies and regency_code for districts.

    Examples:
        logibase region import provinces provinces.csv
        logibase region import regencies regencies.csv
    """
    service = RegionService(ctx.obj["db"])
    try:
        count = service.import_csv(level, csv_file)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Imported {count} {level}")


@region_group.command("list")
@click.option("--countries", is_flag=True, help="List countries instead of provinces")
@click.option("--province", help="List regencies of this province code")
@click.option("--regency", help="List districts of this regency code")
@click.pass_context
def list_regions(ctx, countries: bool, province: str | None, regency: str | None):
    """List provinces, or the regencies/districts below one."""
    service = RegionService(ctx.obj["db"])

    if countries:
        rows = [(c.code, c.name) for c in service.list_countries()]
        title = "Countries"
    elif regency:
        rows = [(d.code, d.name) for d in service.list_districts(regency)]
        title = f"Districts of {regency}"
    elif province:
        rows = [(r.code, r.name) for r in service.list_regencies(province)]
        title = f"Regencies of {province}"
    else:
        rows = [(p.code, p.name) for p in service.list_provinces()]
        title = "Provinces"

    if not rows:
        click.echo(f"No {title.split()[0].lower()} found.")
        return

    click.echo(f"\n{title}:")
    click.echo("-" * 60)
    for code, name in rows:
        click.echo(f"{code:10s} | {name}")


def register_commands(cli):
    """Register region commands with main CLI."""
    cli.add_command(region_group, name="region")
