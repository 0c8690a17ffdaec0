"""Access evaluation for tier-gated content.

Decides whether a visitor may see a content item given the item's access
requirement and the visitor's roles. Member roles follow the naming
convention ``<prefix><tier label>``, e.g. ``member_gold``.

Decision order:
- Unrestricted content: grant
- Anonymous visitor: deny
- "registered": grant any authenticated visitor
- "members": grant if the visitor holds any member tier
- Tier number: grant if the visitor's highest tier is at least that number
- Unrecognized requirement: deny
- Any override role upgrades a denial to a grant
"""

import logging
from typing import Any, Iterable

from .conf import GateConfig
from .identity import VisitorIdentity
from .requirements import AccessRequirement, RequirementKind


logger = logging.getLogger(__name__)


class AccessEvaluator:
    """Stateless access decisions over an immutable GateConfig."""

    def __init__(self, config: GateConfig):
        self.config = config

    def highest_member_tier(self, roles: Iterable[str]) -> int | None:
        """Return the highest tier number among the visitor's member roles.

        Roles carrying the member prefix with a label that is not in the
        tier table are ignored. Returns None when no role maps to a tier.
        """
        prefix = self.config.member_role_prefix
        tiers = [
            self.config.tier_for_label(role[len(prefix):])
            for role in roles
            if isinstance(role, str) and role.startswith(prefix)
        ]
        tiers = [tier for tier in tiers if tier is not None]
        return max(tiers) if tiers else None

    def check_access(
        self,
        requirement: Any,
        visitor: VisitorIdentity,
        override_roles: Iterable[str] | None = None,
    ) -> tuple[bool, str]:
        """Decide whether a visitor may access content with this requirement.

        Args:
            requirement: Parsed AccessRequirement, or the raw metadata value
            visitor: The visitor's identity
            override_roles: Replaces the configured override roles for this call

        Returns:
            Tuple of (allowed: bool, reason: str)
            If allowed, reason is empty string.
            If denied, reason explains why.
        """
        if not isinstance(requirement, AccessRequirement):
            requirement = AccessRequirement.parse(requirement, self.config)

        if requirement.is_unrestricted:
            return True, ""

        if visitor is None or visitor.is_anonymous:
            return False, "Authentication required"

        allowed, reason = self._check_requirement(requirement, visitor)

        # Override roles can only upgrade a denial.
        if not allowed:
            if override_roles is None:
                override_roles = self.config.override_roles
            held = visitor.roles.intersection(override_roles)
            if held:
                logger.debug(
                    "Visitor %s granted by override role(s) %s", visitor.id, sorted(held)
                )
                return True, ""

        logger.debug(
            "Access %s for visitor %s on %s requirement: %s",
            "granted" if allowed else "denied",
            visitor.id,
            requirement.kind,
            reason or "ok",
        )
        return allowed, reason

    def can_access(
        self,
        requirement: Any,
        visitor: VisitorIdentity,
        override_roles: Iterable[str] | None = None,
    ) -> bool:
        allowed, _ = self.check_access(requirement, visitor, override_roles)
        return allowed

    def _check_requirement(
        self, requirement: AccessRequirement, visitor: VisitorIdentity
    ) -> tuple[bool, str]:
        if requirement.kind == RequirementKind.REGISTERED:
            return True, ""

        if requirement.kind == RequirementKind.UNRECOGNIZED:
            # Fail closed on metadata we cannot interpret.
            logger.warning(
                "Unrecognized access level %r; denying access", requirement.raw
            )
            return False, f"Unrecognized access level: {requirement.raw!r}"

        highest = self.highest_member_tier(visitor.roles)

        if requirement.kind == RequirementKind.MEMBERS:
            if highest is not None:
                return True, ""
            return False, "Member tier required"

        if requirement.kind == RequirementKind.TIER:
            if highest is not None and highest >= requirement.tier:
                return True, ""
            label = self.config.member_tiers.get(requirement.tier, requirement.tier)
            return False, f"Requires member tier {label} or higher"

        return False, f"Unknown requirement kind: {requirement.kind}"


def can_access(
    requirement: Any,
    visitor: VisitorIdentity,
    override_roles: Iterable[str] | None = None,
    config: GateConfig | None = None,
) -> bool:
    """Check access using the given config, or the process-wide one."""
    if config is None:
        from .services import get_gate

        return get_gate().evaluator.can_access(requirement, visitor, override_roles)
    return AccessEvaluator(config).can_access(requirement, visitor, override_roles)
