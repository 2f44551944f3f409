"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ChoreId, HouseholdId wrap UUIDs — never use bare UUID in domain logic
    - UserId wraps the external account identifier (opaque string)
    - Version is a positive int, starts at 1, incremented by the store only
    - All closed sets encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ChoreId = NewType("ChoreId", UUID)
HouseholdId = NewType("HouseholdId", UUID)
UserId = NewType("UserId", str)


# ─── Value Types ─────────────────────────────────────────────────

Version = NewType("Version", int)             # >= 1

INITIAL_VERSION = Version(1)
MIN_INTERVAL_VALUE: int = 1
MAX_INTERVAL_VALUE: int = 1000


# ─── Enums ───────────────────────────────────────────────────────

class IntervalType(str, Enum):
    """Recurrence categories. Closed set — the calculator matches exhaustively."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"

    @property
    def uses_value(self) -> bool:
        """daily and weekly ignore interval_value (always one step)."""
        return self not in (IntervalType.DAILY, IntervalType.WEEKLY)


class ChoreState(str, Enum):
    """Completion state — derived from the presence of a completion record."""
    PENDING = "pending"
    COMPLETED = "completed"


class HouseholdRole(str, Enum):
    """Membership role within a household."""
    ADMIN = "admin"
    MEMBER = "member"


class MessageClass(str, Enum):
    """User-facing error classes the presentation layer distinguishes."""
    STALE_VIEW = "stale_view"
    NO_LONGER_APPLICABLE = "no_longer_applicable"
    FIX_INPUT = "fix_input"
    TRANSPORT = "transport"
