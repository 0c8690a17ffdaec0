"""Template filters for django-blocked-content.

Usage:
    {% load blocked_content %}
    {% if article|user_can_access:request.user %}
        {{ article.body }}
    {% else %}
        {% include "partials/paywall-teaser.html" %}
    {% endif %}
"""

from django import template

from django_blocked_content.services import get_gate

register = template.Library()


@register.filter
def user_can_access(content, user):
    return get_gate().user_can_access(content, user)
