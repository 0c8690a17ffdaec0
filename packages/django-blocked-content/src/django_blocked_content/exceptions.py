"""Exceptions for django-blocked-content."""


class BlockedContentError(Exception):
    """Base exception for blocked content errors."""
    pass


class BlockedContentConfigError(BlockedContentError):
    """Raised when BLOCKED_CONTENT_* settings are invalid."""
    pass
