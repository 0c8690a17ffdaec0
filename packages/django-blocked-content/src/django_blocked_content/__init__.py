"""django-blocked-content: Tier-gated content with blocked template fallbacks."""

__version__ = "0.1.0"

__all__ = [
    "AccessEvaluator",
    "AccessRequirement",
    "ContentGate",
    "GateConfig",
    "TemplateSelector",
    "VisitorIdentity",
    "can_access",
    "get_gate",
    "select",
]


def __getattr__(name):
    """Lazy imports to prevent AppRegistryNotReady errors."""
    if name in ("AccessEvaluator", "can_access"):
        from . import access

        return getattr(access, name)
    if name == "AccessRequirement":
        from .requirements import AccessRequirement

        return AccessRequirement
    if name in ("ContentGate", "get_gate"):
        from . import services

        return getattr(services, name)
    if name == "GateConfig":
        from .conf import GateConfig

        return GateConfig
    if name in ("TemplateSelector", "select"):
        from . import selection

        return getattr(selection, name)
    if name == "VisitorIdentity":
        from .identity import VisitorIdentity

        return VisitorIdentity
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
