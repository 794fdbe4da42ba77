"""CLI entry point for adminkit management commands."""

import json
import sys
from typing import Any

import click

from adminkit import create_app
from adminkit.app import App
from adminkit.database import check_db_connection, init_database
from adminkit.exceptions import BusinessLogicException
from adminkit.services.settings_service import SettingsService


def _parse_value(raw: str) -> Any:
    """Parse a command-line value as JSON, falling back to the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _connected_app() -> App:
    """Create the app and exit when the database is unreachable."""
    app = create_app()

    with app.app_context():
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

    return app


def _store(app: App, target_type: str | None, target_id: int | None) -> SettingsService:
    store: SettingsService = app.container.settings_service()
    if target_type is None and target_id is None:
        return store
    return store.for_target(target_type, target_id)


def _commit(app: App) -> None:
    session = app.container.db_session()
    session.commit()


target_options = [
    click.option("--target-type", default=None, help="Owning entity type (e.g. User)"),
    click.option("--target-id", type=int, default=None, help="Owning entity id"),
]


def with_target(func: Any) -> Any:
    """Add --target-type/--target-id options to a command."""
    for option in reversed(target_options):
        func = option(func)
    return func


@click.group()
def cli() -> None:
    """adminkit CLI - Database and settings management commands."""
    pass


@cli.command()
@click.option("--recreate", is_flag=True, help="Drop all tables before creating them")
@click.option(
    "--yes-i-am-sure",
    is_flag=True,
    help="Required safety flag when using --recreate",
)
def init_db(recreate: bool, yes_i_am_sure: bool) -> None:
    """Create database tables for all models.

    Examples:
        adminkit-cli init-db                              Create missing tables
        adminkit-cli init-db --recreate --yes-i-am-sure   Drop and recreate all tables
    """
    # Safety check for recreate
    if recreate and not yes_i_am_sure:
        click.echo(
            "Error: --recreate requires --yes-i-am-sure flag for safety", err=True
        )
        click.echo("   This will DROP ALL TABLES and recreate them!", err=True)
        sys.exit(1)

    app = _connected_app()

    with app.app_context():
        # Let operator know which database is targeted
        click.echo(f"Using database: {app.config['SQLALCHEMY_DATABASE_URI']}")

        try:
            created = init_database(recreate=recreate)
        except Exception as e:
            click.echo(f"Error creating tables: {e}", err=True)
            sys.exit(1)

        if created:
            click.echo(f"Created {len(created)} table(s):")
            for table in created:
                click.echo(f"  - {table}")
        else:
            click.echo("Database is already up to date")


@cli.group()
def settings() -> None:
    """Read and write stored settings."""
    pass


@settings.command("get")
@click.argument("name")
@with_target
def get_setting(name: str, target_type: str | None, target_id: int | None) -> None:
    """Print a setting value as JSON (falls back to its default)."""
    app = _connected_app()

    with app.app_context():
        value = _store(app, target_type, target_id).get(name)
        click.echo(json.dumps(value))


@settings.command("set")
@click.argument("name")
@click.argument("value")
@with_target
def set_setting(
    name: str, value: str, target_type: str | None, target_id: int | None
) -> None:
    """Store a setting. VALUE is parsed as JSON, else stored as a string."""
    app = _connected_app()

    with app.app_context():
        try:
            written = _store(app, target_type, target_id).set(name, _parse_value(value))
            _commit(app)
        except BusinessLogicException as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)

        click.echo(f"{name} = {json.dumps(written)}")


@settings.command("list")
@click.option("--prefix", default=None, help="Only list settings starting with this prefix")
@with_target
def list_settings(
    prefix: str | None, target_type: str | None, target_id: int | None
) -> None:
    """List settings merged over the defaults."""
    app = _connected_app()

    with app.app_context():
        values = _store(app, target_type, target_id).all(prefix)

        if not values:
            click.echo("No settings found")
            return

        for name, value in sorted(values.items()):
            click.echo(f"{name} = {json.dumps(value)}")


@settings.command("delete")
@click.argument("name")
@with_target
def delete_setting(name: str, target_type: str | None, target_id: int | None) -> None:
    """Delete a stored setting."""
    app = _connected_app()

    with app.app_context():
        try:
            _store(app, target_type, target_id).destroy(name)
            _commit(app)
        except BusinessLogicException as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)

        click.echo(f"Deleted {name}")


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
