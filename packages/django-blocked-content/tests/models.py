"""Test models for django-blocked-content tests."""

from django.db import models


class Article(models.Model):
    """Content item carrying its access level in metadata."""

    slug = models.SlugField(max_length=200, unique=True)
    title = models.CharField(max_length=255)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        app_label = "tests"

    def __str__(self):
        return self.title
