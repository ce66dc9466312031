# Overview: Flask CLI command groups for bootstrap, site maintenance, and reporting.

# backend/mineor/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Use: python -m flask --app mineor <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask --app mineor system init
#   Idempotent bootstrap: creates tables, seeds the default site and sample data, creates the local profile.
# - python -m flask --app mineor system seed [--seed-value 42]
#   Sample data only, for a store whose tables already exist.
# - python -m flask --app mineor system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
# - python -m flask --app mineor system status
#   Show schema revision, active site, profile and record counts.
#
# Site management:
# - python -m flask --app mineor sites list
# - python -m flask --app mineor sites create --name "Site Likasi" --location "Likasi, Haut-Katanga"
# - python -m flask --app mineor sites activate 2
# - python -m flask --app mineor sites delete 2 --yes
#   Removes the site and every production, worker, inventory, purchase, report and attendance row it owns.
#
# Reporting:
# - python -m flask --app mineor reports summary --start 2024-01-01 --end 2024-01-31 [--site-id 1]
# - python -m flask --app mineor reports export-production --start 2024-01-01 --end 2024-01-31 [--output file.csv]

import json
import random

import click
from flask.cli import with_appcontext

from .extensions import db
from .errors import MineOrError
from .models import Site, SITE_OWNED_MODELS
from .services import export_service, production_service, reporting_service, seed_service, site_service
from .services.session_service import bootstrap_context


def _resolve_site_id(site_id):
    if site_id is not None:
        return site_id
    site = site_service.get_active_site()
    if site is None:
        raise click.ClickException("No active site. Run: python -m flask --app mineor system init")
    return site.id


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@with_appcontext
def init_system():
    """
    Initialize the local store: tables, default site, sample data, settings and profile.

    Seeding only runs on an empty store, so this is safe to repeat.
    """
    click.echo("START Initializing MineOr store...")
    seed_service.init_store()
    seeded = seed_service.seed_database()
    if seeded:
        click.echo(f"PASS Seeded default site: {seeded.name} (ID: {seeded.id})")
    else:
        click.echo("PASS Store already seeded, skipping sample data")

    try:
        context = bootstrap_context(seed=False)
    except MineOrError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"PASS Active site: {context.active_site.name} (ID: {context.active_site.id})")
    click.echo(f"PASS Profile: {context.user.full_name} ({context.user.role})")


@system_group.command('seed')
@click.option('--seed-value', type=int, default=None, help='Random seed for reproducible sample production')
@with_appcontext
def seed_cli(seed_value):
    """Load sample data into an empty store (tables must exist)."""
    rng = random.Random(seed_value) if seed_value is not None else None
    try:
        site = seed_service.seed_database(rng)
    except MineOrError as exc:
        raise click.ClickException(str(exc))
    if site is None:
        click.echo("FAIL Store already has sites; seeding skipped")
        return
    click.echo(f"PASS Seeded site: {site.name} (ID: {site.id})")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Confirm destructive reset')
@with_appcontext
def reset_db(yes):
    """DEV/TEST only: drop and recreate all tables."""
    if not yes:
        click.echo("FAIL Refusing to reset without --yes")
        return
    db.drop_all()
    db.create_all()
    click.echo("PASS Database reset")


@system_group.command('status')
@with_appcontext
def status():
    """Show schema revision, active site and record counts."""
    click.echo(f"Schema revision: {seed_service.schema_revision() or 'unmanaged (create_all)'} (head: {seed_service.SCHEMA_VERSION})")
    active = site_service.get_active_site()
    click.echo(f"Active site: {active.name + ' (ID: ' + str(active.id) + ')' if active else '-'}")
    click.echo(f"Sites: {db.session.query(Site).count()}")
    for model in SITE_OWNED_MODELS:
        click.echo(f"{model.__tablename__}: {db.session.query(model).count()}")


@click.group('sites')
def sites_group():
    """Site management commands."""


@sites_group.command('list')
@with_appcontext
def list_sites():
    """List all sites."""
    sites = site_service.list_sites()
    if not sites:
        click.echo("No sites found.")
        return

    click.echo("\n" + "="*70)
    click.echo(f"{'ID':<5} {'Name':<25} {'Location':<30} {'Active'}")
    click.echo("="*70)
    for site in sites:
        click.echo(f"{site.id:<5} {site.name:<25} {site.location or '-':<30} {'Yes' if site.is_active else 'No'}")
    click.echo("="*70 + "\n")


@sites_group.command('create')
@click.option('--name', required=True, help='Site name')
@click.option('--location', default='', help='Site location')
@with_appcontext
def create_site_cli(name, location):
    """Create a new site."""
    try:
        site = site_service.create_site(name, location)
    except MineOrError as exc:
        raise click.ClickException(str(exc))
    click.echo(f"PASS Created site: {site.name} (ID: {site.id})")


@sites_group.command('activate')
@click.argument('site_id', type=int)
@with_appcontext
def activate_site(site_id):
    """Make a site the active one."""
    try:
        site = site_service.set_active_site(site_id)
    except MineOrError as exc:
        raise click.ClickException(str(exc))
    click.echo(f"PASS Active site: {site.name} (ID: {site.id})")


@sites_group.command('delete')
@click.argument('site_id', type=int)
@click.option('--yes', is_flag=True, help='Confirm deletion of the site and all of its data')
@with_appcontext
def delete_site_cli(site_id, yes):
    """Delete a site and everything it owns."""
    if not yes:
        click.echo("FAIL Refusing to delete without --yes")
        return
    try:
        result = site_service.delete_site(site_id)
    except MineOrError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"PASS Deleted site {site_id}")
    for table, count in result["removed"].items():
        click.echo(f"   {table}: {count} removed")
    if result["activated_site_id"]:
        click.echo(f"PASS Active site is now ID {result['activated_site_id']}")


@click.group('reports')
def reports_group():
    """Reporting and export commands."""


@reports_group.command('summary')
@click.option('--start', required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help='First day (YYYY-MM-DD)')
@click.option('--end', required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help='Last day (YYYY-MM-DD)')
@click.option('--site-id', type=int, default=None, help='Defaults to the active site')
@with_appcontext
def report_summary(start, end, site_id):
    """Print the production report for a date range as JSON."""
    try:
        report = reporting_service.production_report(site_id=_resolve_site_id(site_id), start=start, end=end)
    except MineOrError as exc:
        raise click.ClickException(str(exc))
    click.echo(json.dumps(report, indent=2, ensure_ascii=False))


@reports_group.command('export-production')
@click.option('--start', required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help='First day (YYYY-MM-DD)')
@click.option('--end', required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help='Last day (YYYY-MM-DD)')
@click.option('--site-id', type=int, default=None, help='Defaults to the active site')
@click.option('--output', type=click.Path(dir_okay=False, writable=True), default=None,
              help='Defaults to production_<start>_<end>.csv')
@with_appcontext
def export_production(start, end, site_id, output):
    """Write production entries in the range to a CSV file."""
    try:
        productions = production_service.productions_between(_resolve_site_id(site_id), start, end)
        content = export_service.render_production_csv(productions)
        path = output or export_service.export_filename(start, end)
    except MineOrError as exc:
        raise click.ClickException(str(exc))

    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)
    click.echo(f"PASS Exported {len(productions)} rows to {path}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(sites_group)
    app.cli.add_command(reports_group)
