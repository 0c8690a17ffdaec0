"""Access requirements attached to content items.

A content item's required access level is stored as free-form metadata, so
parsing is total: any value that is not a known level becomes an
UNRECOGNIZED requirement instead of raising.
"""

from dataclasses import dataclass
from typing import Any

from django.db import models

from .conf import MEMBERS, REGISTERED, GateConfig


class RequirementKind(models.TextChoices):
    """Kinds of access requirement a content item can carry."""

    UNRESTRICTED = "unrestricted", "Unrestricted"
    REGISTERED = "registered", "Registered Users"
    MEMBERS = "members", "Any Member Tier"
    TIER = "tier", "Member Tier"
    UNRECOGNIZED = "unrecognized", "Unrecognized"


@dataclass(frozen=True)
class AccessRequirement:
    """Parsed access requirement.

    Attributes:
        kind: What sort of requirement this is
        tier: Minimum tier number when kind is TIER, else None
        raw: The metadata value this was parsed from
    """

    kind: str
    tier: int | None = None
    raw: Any = None

    @property
    def is_unrestricted(self) -> bool:
        return self.kind == RequirementKind.UNRESTRICTED

    @classmethod
    def unrestricted(cls) -> "AccessRequirement":
        return cls(kind=RequirementKind.UNRESTRICTED)

    @classmethod
    def parse(cls, raw: Any, config: GateConfig) -> "AccessRequirement":
        """Parse a raw metadata value into a requirement.

        Accepts None or blank strings (unrestricted), the sentinels
        "registered" and "members", tier numbers as int or decimal string,
        and tier labels. Sentinels and tier labels are matched
        case-insensitively. Everything else is UNRECOGNIZED.
        """
        if raw is None:
            return cls.unrestricted()

        # bool is an int subclass; True must not read as tier 1.
        if isinstance(raw, bool):
            return cls(kind=RequirementKind.UNRECOGNIZED, raw=raw)

        if isinstance(raw, int):
            if raw in config.member_tiers:
                return cls(kind=RequirementKind.TIER, tier=raw, raw=raw)
            return cls(kind=RequirementKind.UNRECOGNIZED, raw=raw)

        if isinstance(raw, str):
            value = raw.strip().lower()
            if not value:
                return cls.unrestricted()
            if value == REGISTERED:
                return cls(kind=RequirementKind.REGISTERED, raw=raw)
            if value == MEMBERS:
                return cls(kind=RequirementKind.MEMBERS, raw=raw)
            if value.isdecimal():
                return cls.parse(int(value), config)._with_raw(raw)
            tier = config.tier_for_label(value, ignore_case=True)
            if tier is not None:
                return cls(kind=RequirementKind.TIER, tier=tier, raw=raw)

        return cls(kind=RequirementKind.UNRECOGNIZED, raw=raw)

    def _with_raw(self, raw: Any) -> "AccessRequirement":
        return AccessRequirement(kind=self.kind, tier=self.tier, raw=raw)
