"""SQLAlchemy Declarative Base: shared base class for all ORM models.

Design Decisions:
    - Separate file for Base: avoids circular imports between models
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all DevConnect ORM models."""
    pass
