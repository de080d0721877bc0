"""Database declarations: SQLAlchemy Base shared by every ORM model."""
