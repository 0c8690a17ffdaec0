"""Template selection for blocked content.

When access is denied, blocked variants of every candidate template are
tried before the originals:

    ["single-post.html", "single.html"]
    -> ["single-paywalled-post.html", "single-paywalled.html",
        "single-post.html", "single.html"]

If the theme ships no blocked template, resolution falls through to the
normal templates.
"""

import logging
from typing import Sequence

from .conf import GateConfig


logger = logging.getLogger(__name__)


class TemplateSelector:
    """Rewrites template candidate lists for denied visitors."""

    def __init__(self, config: GateConfig):
        self.config = config

    def blocked_variant(self, name: str, content_type_prefix: str) -> str | None:
        """Insert the blocked suffix after the leading content type prefix.

        The prefix is matched against the whole name first, so prefixes with
        directories ("blog/single") work. Otherwise it is matched against the
        final path segment, keeping directories as they are. Returns None if
        neither starts with the prefix.
        """
        if not content_type_prefix:
            return None
        if name.startswith(content_type_prefix):
            rest = name[len(content_type_prefix):]
            return f"{content_type_prefix}{self.config.template_suffix}{rest}"

        directory, sep, basename = name.rpartition("/")
        if not basename.startswith(content_type_prefix):
            return None
        rest = basename[len(content_type_prefix):]
        return f"{directory}{sep}{content_type_prefix}{self.config.template_suffix}{rest}"

    def select(
        self,
        candidates: Sequence[str],
        content_type_prefix: str,
        granted: bool,
    ) -> list[str]:
        """Return the template search order for a render request.

        Args:
            candidates: Template names, most specific first
            content_type_prefix: Leading part of the names to suffix, e.g. "single"
            granted: The access verdict

        Returns:
            The candidates unchanged if granted; otherwise the blocked
            variants in the same relative order, followed by the candidates.
        """
        if granted:
            return list(candidates)

        blocked = []
        for name in candidates:
            variant = self.blocked_variant(name, content_type_prefix)
            if variant is not None:
                blocked.append(variant)

        logger.debug("Access denied; trying blocked templates %s first", blocked)
        return blocked + list(candidates)


def select(
    candidates: Sequence[str],
    content_type_prefix: str,
    granted: bool,
    config: GateConfig | None = None,
) -> list[str]:
    """Select templates using the given config, or the process-wide one."""
    if config is None:
        from .services import get_gate

        return get_gate().selector.select(candidates, content_type_prefix, granted)
    return TemplateSelector(config).select(candidates, content_type_prefix, granted)
