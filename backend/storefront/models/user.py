"""Admin user and role models."""

from sqlalchemy import Column, ForeignKey
from sqlmodel import Field, Relationship, SQLModel

from storefront.models.types import ULIDType, new_ulid


class Role(SQLModel, table=True):
    """Named role (admin, user)."""

    __tablename__ = "roles"

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    name: str = Field(unique=True)


class User(SQLModel, table=True):
    """Back-office user. `password` holds a bcrypt hash."""

    __tablename__ = "users"

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    name: str
    email: str = Field(unique=True, index=True)
    password: str
    role_id: str | None = Field(default=None, sa_column=Column(ULIDType, ForeignKey("roles.id"), nullable=True))

    role: Role | None = Relationship()
