"""ORM Models — SQLAlchemy declarative models for users, events and enrollments.

Invariants:
    - All models inherit from Base (db/base.py)
    - Integer serial primary keys; enrollments reference users and events

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / Alembic
"""

from koinonia.models.user import User  # noqa: F401
from koinonia.models.event import Event  # noqa: F401
from koinonia.models.enrollment import Enrollment  # noqa: F401
