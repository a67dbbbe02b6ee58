"""Reference data loading.

Catalog file format (JSON):

    {
      "product_types": ["T-Shirt", "Hoodie"],
      "colors": ["Black", "White"],
      "sizes": ["Small", "Medium", "Large"],
      "brands": [
        {"name": "Gildan", "types": {"T-Shirt": ["Small", "Medium"], "Hoodie": ["Large"]}}
      ]
    }

Each brand maps the product types it is offered for to the sizes available
for that pair. Loading is idempotent: rows are matched by name/value and
only missing ones are inserted.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from storefront.models.catalog import Brand, BrandType, Color, ProductType, Size, SizeAvailability
from storefront.models.user import Role, User
from storefront.services.auth.passwords import hash_password

logger = structlog.get_logger(__name__)


class BrandSeed(BaseModel):
    name: str
    types: dict[str, list[str]] = Field(default_factory=dict)


class CatalogSeed(BaseModel):
    product_types: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    brands: list[BrandSeed] = Field(default_factory=list)


@dataclass
class SeedReport:
    created: dict[str, int] = field(default_factory=dict)

    def count(self, table: str) -> None:
        self.created[table] = self.created.get(table, 0) + 1


async def _get_or_create(
    session: AsyncSession,
    model: type[SQLModel],
    report: SeedReport,
    **values: Any,
) -> Any:
    statement = select(model)
    for column, value in values.items():
        statement = statement.where(getattr(model, column) == value)
    result = await session.execute(statement)
    existing = result.scalars().first()
    if existing is not None:
        return existing

    row = model(**values)
    session.add(row)
    await session.flush()
    report.count(model.__tablename__)  # type: ignore[arg-type]
    return row


async def seed_catalog(session: AsyncSession, seed: CatalogSeed) -> SeedReport:
    """Insert missing reference rows from a catalog description."""
    report = SeedReport()

    types = {name: await _get_or_create(session, ProductType, report, name=name) for name in seed.product_types}
    for value in seed.colors:
        await _get_or_create(session, Color, report, value=value)
    sizes = {value: await _get_or_create(session, Size, report, value=value) for value in seed.sizes}

    for brand_seed in seed.brands:
        brand = await _get_or_create(session, Brand, report, name=brand_seed.name)
        for type_name, size_values in brand_seed.types.items():
            if type_name not in types:
                types[type_name] = await _get_or_create(session, ProductType, report, name=type_name)
            brand_type = await _get_or_create(
                session, BrandType, report, brand_id=brand.id, type_id=types[type_name].id
            )
            for size_value in size_values:
                if size_value not in sizes:
                    sizes[size_value] = await _get_or_create(session, Size, report, value=size_value)
                await _get_or_create(
                    session,
                    SizeAvailability,
                    report,
                    size_id=sizes[size_value].id,
                    brand_type_id=brand_type.id,
                )

    await session.commit()
    logger.info("Catalog seeded", created=report.created)
    return report


async def create_user(session: AsyncSession, *, name: str, email: str, password: str, role: str) -> User:
    """Create a back-office user with a bcrypt password hash."""
    report = SeedReport()
    role_row = await _get_or_create(session, Role, report, name=role)
    user = User(name=name, email=email, password=hash_password(password), role_id=role_row.id)
    session.add(user)
    await session.commit()
    logger.info("Created user", user_id=user.id, email=email, role=role)
    return user
