"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Chores and memberships are scoped by household_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from choretrack.models.chore import ChoreRow  # noqa: F401
from choretrack.models.household_member import HouseholdMemberRow  # noqa: F401
from choretrack.models.user_profile import UserProfileRow  # noqa: F401
