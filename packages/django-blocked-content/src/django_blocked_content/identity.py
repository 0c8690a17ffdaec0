"""Visitor identity as seen by the access evaluator."""

from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass(frozen=True)
class VisitorIdentity:
    """The current visitor: an id and a set of role labels.

    An identity without an id is anonymous, whatever roles it claims.
    """

    id: Any = None
    roles: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        if isinstance(self.roles, str):
            raise TypeError("roles must be an iterable of role names, not a string")
        object.__setattr__(self, "roles", frozenset(self.roles or ()))

    @classmethod
    def anonymous(cls) -> "VisitorIdentity":
        return cls()

    @classmethod
    def authenticated(cls, id: Any, roles: Iterable[str] = ()) -> "VisitorIdentity":
        return cls(id=id, roles=roles)

    @property
    def is_anonymous(self) -> bool:
        return self.id is None or self.id == ""
