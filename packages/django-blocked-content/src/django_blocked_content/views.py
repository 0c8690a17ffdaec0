"""Views for django-blocked-content.

Provides:
- BlockedContentTemplateMixin: Swaps in blocked templates for denied visitors
- BlockedContentDetailView: DetailView with the mixin applied

Usage:
    class ArticleDetailView(BlockedContentTemplateMixin, DetailView):
        model = Article
        template_type = "single"

        def get_template_names(self):
            ...  # super() result is passed through the gate
"""

from django.views.generic import DetailView

from .services import get_gate


class BlockedContentTemplateMixin:
    """Render a blocked template when the visitor cannot access the object.

    The parent view's template names are kept as the fallback, so a theme
    without blocked templates renders the normal template.

    Attributes:
        template_type: Leading part of template names that receives the
            blocked suffix (e.g. "single" -> "single-paywalled"). Defaults to
            the model name, matching DetailView names like "blog/article_detail.html".
    """

    template_type = None

    def get_gate(self):
        return get_gate()

    def get_access_object(self):
        """Return the content item whose access requirement applies."""
        if getattr(self, "object", None) is None:
            self.object = self.get_object()
        return self.object

    def get_template_type(self) -> str:
        if self.template_type:
            return self.template_type
        return self.get_access_object()._meta.model_name

    def get_content_blocked(self) -> bool:
        if not hasattr(self, "_content_blocked"):
            self._content_blocked = not self.get_gate().user_can_access(
                self.get_access_object(), self.request.user
            )
        return self._content_blocked

    def get_template_names(self):
        candidates = super().get_template_names()
        return self.get_gate().selector.select(
            candidates,
            self.get_template_type(),
            granted=not self.get_content_blocked(),
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["content_blocked"] = self.get_content_blocked()
        return context


class BlockedContentDetailView(BlockedContentTemplateMixin, DetailView):
    """DetailView that falls back to blocked templates for denied visitors."""

    pass
