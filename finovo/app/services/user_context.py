"""
User context.

Immutable bundle of the signed-in user, their profile and their goals, built
once per request (see api.v1.auth.get_user_context) and passed explicitly to
whatever needs it.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from finovo.app.db.models import FinancialGoal, User, UserProfile

# Profile fields that must all be present before dashboards are shown
REQUIRED_PROFILE_FIELDS = ("monthly_income", "age", "monthly_expense_target", "emergency_fund_target")


def missing_profile_fields(profile: Optional[UserProfile]) -> Tuple[str, ...]:
    """Required fields that are still None (all of them without a profile)."""
    if profile is None:
        return REQUIRED_PROFILE_FIELDS
    return tuple(name for name in REQUIRED_PROFILE_FIELDS if getattr(profile, name) is None)


def is_profile_complete(profile: Optional[UserProfile]) -> bool:
    """
    True iff the profile exists and every required field is present.

    Presence is an explicit None check: an income or target of 0 counts as set.
    """
    return not missing_profile_fields(profile)


@dataclass(frozen=True)
class UserContext:
    user: User
    profile: Optional[UserProfile] = None
    goals: Tuple[FinancialGoal, ...] = field(default_factory=tuple)

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def display_name(self) -> str:
        if self.profile is not None and self.profile.name:
            return self.profile.name
        return self.user.email

    @property
    def is_profile_complete(self) -> bool:
        return is_profile_complete(self.profile)
