"""ORM Models: SQLAlchemy declarative models for the three aggregates.

Invariants:
    - All models inherit from Base (db/base.py)
    - Embedded sequences (likes, comments, experience, education) live in JSON
      columns on their parent row; there are no child tables

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from devconnect.models.user import User  # noqa: F401
from devconnect.models.profile import Profile  # noqa: F401
from devconnect.models.post import Post  # noqa: F401
