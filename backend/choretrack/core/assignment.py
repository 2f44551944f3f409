"""Assignment Resolver — maps an assignee id to a member display profile.

Invariants:
    - Read-only: never mutates members or chores
    - assignee None -> the "Anyone" profile (user_id None)
    - Assignee no longer in the household -> "Former member" (is_member False)
    - Missing display name falls back to the user id
"""

from typing import Iterable, Mapping

from choretrack.core.chore import HouseholdMember, MemberProfile
from choretrack.core.domain_types import UserId

UNASSIGNED_LABEL = "Anyone"
FORMER_MEMBER_LABEL = "Former member"


class AssignmentResolver:
    """Lookup table built once per household snapshot of members."""

    def __init__(
        self,
        members: Iterable[HouseholdMember],
        display_names: Mapping[str, str] | None = None,
    ):
        names = display_names or {}
        self._profiles: dict[str, MemberProfile] = {
            m.user_id: MemberProfile(
                user_id=m.user_id,
                display_name=names.get(m.user_id) or m.user_id,
                role=m.role,
            )
            for m in members
        }

    def resolve(self, assignee: UserId | None) -> MemberProfile:
        if assignee is None:
            return MemberProfile(user_id=None, display_name=UNASSIGNED_LABEL)
        profile = self._profiles.get(assignee)
        if profile is None:
            return MemberProfile(
                user_id=assignee, display_name=FORMER_MEMBER_LABEL, is_member=False,
            )
        return profile

    def label_for(self, assignee: UserId | None) -> str:
        return self.resolve(assignee).display_name

    def is_member(self, user_id: UserId) -> bool:
        return user_id in self._profiles

    @property
    def profiles(self) -> list[MemberProfile]:
        """All current members, sorted by display name then id."""
        return sorted(
            self._profiles.values(),
            key=lambda p: (p.display_name.lower(), p.user_id or ""),
        )
