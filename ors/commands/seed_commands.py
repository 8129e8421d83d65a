import click
from flask import current_app
from flask.cli import with_appcontext

from ors.exceptions import DuplicateKeyError
from ors.extensions import db
from ors.models import Role
from ors.store import get_store
from ors.utils.data_utility import current_timestamp


@click.command("seed")
@click.option("--create-tables", is_flag=True, help="Create missing tables before seeding.")
@with_appcontext
def seed_command(create_tables):
    """Seed the default roles used by registration and sign-in."""
    if create_tables:
        db.create_all()
        click.echo("Ensured database tables.")

    store = get_store("role")
    identity = current_app.config.get("SYSTEM_IDENTITY", "root")
    seeded = 0
    for name in current_app.config.get("SEED_ROLES", ()):
        if store.find_by_unique_key(name) is not None:
            continue
        now = current_timestamp()
        role = Role(
            name=name,
            description=f"{name.title()} role",
            created_by=identity,
            modified_by=identity,
            created_datetime=now,
            modified_datetime=now,
        )
        try:
            store.add(role)
        except DuplicateKeyError:
            continue
        seeded += 1
        click.echo(f"Seeded role {name} (id={role.id}).")

    if seeded == 0:
        click.echo("Roles already seeded.")
