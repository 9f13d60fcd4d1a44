"""Shared SQLAlchemy Base, imported by all models and by Alembic."""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
