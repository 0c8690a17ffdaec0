"""Configuration for django-blocked-content.

All settings are optional and read from Django settings:

    BLOCKED_CONTENT_MEMBER_ROLE_PREFIX = "member_"
    BLOCKED_CONTENT_MEMBER_TIERS = {1: "bronze", 2: "silver", 3: "gold", 4: "platinum"}
    BLOCKED_CONTENT_TEMPLATE_SUFFIX = "-paywalled"
    BLOCKED_CONTENT_OVERRIDE_ROLES = ("administrator", "editor")
    BLOCKED_CONTENT_META_KEY = "_access_level"
    BLOCKED_CONTENT_REQUIREMENT_READER = "myapp.access.read_level"
    BLOCKED_CONTENT_VISITOR_READER = "myapp.access.read_visitor"
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from django.conf import settings

from django_blocked_content.exceptions import BlockedContentConfigError


REGISTERED = "registered"
MEMBERS = "members"

DEFAULT_MEMBER_ROLE_PREFIX = "member_"
DEFAULT_MEMBER_TIERS = {
    1: "bronze",
    2: "silver",
    3: "gold",
    4: "platinum",
}
DEFAULT_TEMPLATE_SUFFIX = "-paywalled"
DEFAULT_OVERRIDE_ROLES = ("administrator", "editor")
DEFAULT_META_KEY = "_access_level"
DEFAULT_REQUIREMENT_READER = "django_blocked_content.services.get_access_requirement"
DEFAULT_VISITOR_READER = "django_blocked_content.services.get_current_visitor"

SETTING_NAMES = (
    "BLOCKED_CONTENT_MEMBER_ROLE_PREFIX",
    "BLOCKED_CONTENT_MEMBER_TIERS",
    "BLOCKED_CONTENT_TEMPLATE_SUFFIX",
    "BLOCKED_CONTENT_OVERRIDE_ROLES",
    "BLOCKED_CONTENT_META_KEY",
    "BLOCKED_CONTENT_REQUIREMENT_READER",
    "BLOCKED_CONTENT_VISITOR_READER",
)


@dataclass(frozen=True)
class GateConfig:
    """Immutable configuration shared by the evaluator and the selector.

    Attributes:
        member_role_prefix: Prefix marking a role as a member tier role
        member_tiers: Read-only mapping of tier number to tier label
        template_suffix: Inserted after the content type prefix of blocked templates
        override_roles: Roles that are always granted access
        meta_key: Metadata key holding a content item's access level
        requirement_reader: Dotted path to the metadata reader
        visitor_reader: Dotted path to the identity reader
    """

    member_role_prefix: str = DEFAULT_MEMBER_ROLE_PREFIX
    member_tiers: Mapping[int, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_MEMBER_TIERS))
    )
    template_suffix: str = DEFAULT_TEMPLATE_SUFFIX
    override_roles: frozenset = frozenset(DEFAULT_OVERRIDE_ROLES)
    meta_key: str = DEFAULT_META_KEY
    requirement_reader: str = DEFAULT_REQUIREMENT_READER
    visitor_reader: str = DEFAULT_VISITOR_READER

    def __post_init__(self):
        if isinstance(self.override_roles, str):
            raise BlockedContentConfigError(
                "BLOCKED_CONTENT_OVERRIDE_ROLES must be a list of role names, not a string"
            )
        object.__setattr__(self, "override_roles", frozenset(self.override_roles))
        self.validate()
        # Read-only and ordered by tier number.
        object.__setattr__(
            self, "member_tiers", MappingProxyType(dict(sorted(self.member_tiers.items())))
        )

    def validate(self) -> None:
        """Check invariants, raising BlockedContentConfigError on the first violation."""
        if not isinstance(self.member_role_prefix, str) or not self.member_role_prefix:
            raise BlockedContentConfigError(
                "BLOCKED_CONTENT_MEMBER_ROLE_PREFIX must be a non-empty string"
            )
        if not isinstance(self.template_suffix, str) or not self.template_suffix:
            raise BlockedContentConfigError(
                "BLOCKED_CONTENT_TEMPLATE_SUFFIX must be a non-empty string"
            )
        if not isinstance(self.member_tiers, Mapping):
            raise BlockedContentConfigError(
                "BLOCKED_CONTENT_MEMBER_TIERS must be a mapping of tier number to label"
            )
        if not self.member_tiers:
            raise BlockedContentConfigError(
                "BLOCKED_CONTENT_MEMBER_TIERS must define at least one tier"
            )

        seen_labels = set()
        for number, label in self.member_tiers.items():
            if isinstance(number, bool) or not isinstance(number, int) or number < 1:
                raise BlockedContentConfigError(
                    f"Tier number must be a positive integer, got {number!r}"
                )
            if not isinstance(label, str) or not label:
                raise BlockedContentConfigError(
                    f"Tier {number} must have a non-empty string label"
                )
            if label.lower() in (REGISTERED, MEMBERS):
                raise BlockedContentConfigError(
                    f"Tier label {label!r} collides with a reserved access level"
                )
            if label.lower() in seen_labels:
                raise BlockedContentConfigError(f"Duplicate tier label: {label!r}")
            seen_labels.add(label.lower())

        for role in self.override_roles:
            if not isinstance(role, str):
                raise BlockedContentConfigError(
                    f"Override roles must be strings, got {role!r}"
                )

    def tier_for_label(self, label: str, ignore_case: bool = False) -> int | None:
        """Return the tier number for a label, or None if unknown."""
        if ignore_case:
            label = label.lower()
        for number, tier_label in self.member_tiers.items():
            if (tier_label.lower() if ignore_case else tier_label) == label:
                return number
        return None

    @classmethod
    def from_settings(cls) -> "GateConfig":
        """Build a config from Django settings, falling back to defaults."""
        override_roles = getattr(
            settings, "BLOCKED_CONTENT_OVERRIDE_ROLES", DEFAULT_OVERRIDE_ROLES
        )

        return cls(
            member_role_prefix=getattr(
                settings, "BLOCKED_CONTENT_MEMBER_ROLE_PREFIX", DEFAULT_MEMBER_ROLE_PREFIX
            ),
            member_tiers=getattr(settings, "BLOCKED_CONTENT_MEMBER_TIERS", DEFAULT_MEMBER_TIERS),
            template_suffix=getattr(
                settings, "BLOCKED_CONTENT_TEMPLATE_SUFFIX", DEFAULT_TEMPLATE_SUFFIX
            ),
            override_roles=override_roles or (),
            meta_key=getattr(settings, "BLOCKED_CONTENT_META_KEY", DEFAULT_META_KEY),
            requirement_reader=getattr(
                settings, "BLOCKED_CONTENT_REQUIREMENT_READER", DEFAULT_REQUIREMENT_READER
            ),
            visitor_reader=getattr(
                settings, "BLOCKED_CONTENT_VISITOR_READER", DEFAULT_VISITOR_READER
            ),
        )
