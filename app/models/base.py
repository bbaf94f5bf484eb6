"""SQLAlchemy declarative Base shared by User and Message."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models; Base.metadata drives create_all and Alembic."""

    pass
