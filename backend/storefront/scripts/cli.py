"""Admin CLI for populating reference data and back-office users."""

import asyncio
from pathlib import Path

import click

from storefront.db import async_session_maker, dispose_engine
from storefront.logging import setup_logging
from storefront.models.enums import UserRole
from storefront.scripts.seed import CatalogSeed, create_user, seed_catalog


@click.group()
def cli() -> None:
    """Storefront administration commands."""
    setup_logging()


@cli.command("seed-catalog")
@click.argument("catalog_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def seed_catalog_command(catalog_file: Path) -> None:
    """Load product types, brands, colors, sizes and availability from CATALOG_FILE (JSON)."""
    seed = CatalogSeed.model_validate_json(catalog_file.read_text(encoding="utf-8"))

    async def run() -> dict[str, int]:
        try:
            async with async_session_maker() as session:
                report = await seed_catalog(session, seed)
                return report.created
        finally:
            await dispose_engine()

    created = asyncio.run(run())
    if not created:
        click.echo("Catalog already up to date")
    for table, count in sorted(created.items()):
        click.echo(f"{table}: {count} created")


@cli.command("create-user")
@click.option("--name", required=True)
@click.option("--email", required=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--role", type=click.Choice([r.value for r in UserRole]), default=UserRole.ADMIN.value, show_default=True)
def create_user_command(name: str, email: str, password: str, role: str) -> None:
    """Create a back-office user."""

    async def run() -> str:
        try:
            async with async_session_maker() as session:
                user = await create_user(session, name=name, email=email, password=password, role=role)
                return user.id
        finally:
            await dispose_engine()

    user_id = asyncio.run(run())
    click.echo(f"Created {role} user {email} ({user_id})")


if __name__ == "__main__":
    cli()
