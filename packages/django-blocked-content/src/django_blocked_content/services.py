"""Services for django-blocked-content.

Wires the access evaluator and template selector to their collaborators:
- a metadata reader returning a content item's required access level
- an identity reader turning a Django user into a VisitorIdentity
- Django's template engine, which resolves the first existing candidate
"""

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Callable, Sequence

from django.template import TemplateDoesNotExist
from django.template.loader import select_template
from django.utils.module_loading import import_string

from .access import AccessEvaluator
from .conf import GateConfig
from .exceptions import BlockedContentConfigError
from .identity import VisitorIdentity
from .requirements import AccessRequirement
from .selection import TemplateSelector


logger = logging.getLogger(__name__)


def get_access_requirement(content: Any, meta_key: str) -> str | int | None:
    """Read a content item's required access level from its metadata.

    Args:
        content: The content item (anything with a ``metadata`` mapping)
        meta_key: Metadata key holding the access level

    Returns:
        The raw stored value, or None if the item has no such metadata
    """
    metadata = getattr(content, "metadata", None)
    if not isinstance(metadata, Mapping):
        return None
    return metadata.get(meta_key)


def get_current_visitor(user: Any) -> VisitorIdentity:
    """Build a VisitorIdentity from a Django user.

    Roles are the user's auth group names. Superusers also hold
    "administrator" and staff users hold "staff".
    Anonymous, unauthenticated or unsaved users are anonymous visitors.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return VisitorIdentity.anonymous()

    user_id = getattr(user, "pk", None)
    if user_id is None:
        return VisitorIdentity.anonymous()

    roles = set()
    groups = getattr(user, "groups", None)
    if groups is not None:
        roles.update(groups.values_list("name", flat=True))
    if getattr(user, "is_superuser", False):
        roles.add("administrator")
    if getattr(user, "is_staff", False):
        roles.add("staff")

    return VisitorIdentity.authenticated(user_id, roles)


def resolve_template(candidates: Sequence[str]) -> str | None:
    """Return the name of the first candidate template that exists.

    Returns None when no candidate exists.
    """
    if not candidates:
        return None
    try:
        template = select_template(list(candidates))
    except TemplateDoesNotExist:
        return None
    return template.template.name


def _load_reader(dotted_path: str) -> Callable:
    try:
        return import_string(dotted_path)
    except ImportError as e:
        raise BlockedContentConfigError(f"Cannot load reader {dotted_path!r}: {e}")


class ContentGate:
    """Decides what to render for a content item and a visitor.

    Built from an immutable GateConfig; holds no per-request state.
    """

    def __init__(self, config: GateConfig | None = None):
        self.config = config if config is not None else GateConfig.from_settings()
        self.evaluator = AccessEvaluator(self.config)
        self.selector = TemplateSelector(self.config)
        self._requirement_reader = _load_reader(self.config.requirement_reader)
        self._visitor_reader = _load_reader(self.config.visitor_reader)

    def requirement_for(self, content: Any) -> AccessRequirement:
        """Read and parse the access requirement of a content item."""
        raw = self._requirement_reader(content, self.config.meta_key)
        return AccessRequirement.parse(raw, self.config)

    def visitor_for(self, user: Any) -> VisitorIdentity:
        visitor = self._visitor_reader(user)
        if not isinstance(visitor, VisitorIdentity):
            logger.warning(
                "Visitor reader returned %r; treating visitor as anonymous", type(visitor)
            )
            return VisitorIdentity.anonymous()
        return visitor

    def check_access(self, content: Any, user: Any) -> tuple[bool, str]:
        return self.evaluator.check_access(
            self.requirement_for(content),
            self.visitor_for(user),
        )

    def user_can_access(self, content: Any, user: Any) -> bool:
        """Determine whether a user can access a content item."""
        allowed, _ = self.check_access(content, user)
        return allowed

    def template_candidates(
        self,
        content: Any,
        user: Any,
        candidates: Sequence[str],
        content_type_prefix: str,
    ) -> list[str]:
        """Return the template search order for rendering content to a user.

        Args:
            content: The content item being rendered
            user: The requesting user
            candidates: Template names, most specific first
            content_type_prefix: Leading part of the names, e.g. "single"

        Returns:
            The candidates unchanged if access is granted, otherwise
            blocked variants followed by the candidates.
        """
        granted = self.user_can_access(content, user)
        return self.selector.select(candidates, content_type_prefix, granted)

    def template_show_or_block(
        self,
        content: Any,
        user: Any,
        candidates: Sequence[str],
        content_type_prefix: str,
    ) -> str | None:
        """Resolve the template to render: a blocked one if access is denied.

        Falls back to the normal templates when no blocked template exists.
        """
        return resolve_template(
            self.template_candidates(content, user, candidates, content_type_prefix)
        )


@lru_cache(maxsize=1)
def get_gate() -> ContentGate:
    """Return the process-wide ContentGate built from settings."""
    return ContentGate(GateConfig.from_settings())


def clear_gate_cache():
    """Drop the process-wide gate so the next call rebuilds it from settings."""
    get_gate.cache_clear()
