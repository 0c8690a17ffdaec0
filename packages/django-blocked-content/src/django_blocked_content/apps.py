"""Django app configuration for django-blocked-content."""

from django.apps import AppConfig
from django.core.signals import setting_changed


def _reset_gate(setting, **kwargs):
    from .conf import SETTING_NAMES
    from .services import clear_gate_cache

    if setting in SETTING_NAMES:
        clear_gate_cache()


class DjangoBlockedContentConfig(AppConfig):
    name = "django_blocked_content"
    verbose_name = "Blocked Content"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        """Build the gate at startup so bad settings fail fast."""
        from .services import get_gate

        setting_changed.connect(_reset_gate, dispatch_uid="django_blocked_content_reset_gate")
        get_gate()
