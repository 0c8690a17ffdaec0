"""Tests for blocked template selection."""

import pytest

from django_blocked_content.conf import GateConfig
from django_blocked_content.selection import TemplateSelector, select


@pytest.fixture
def selector(config):
    return TemplateSelector(config)


class TestBlockedVariant:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("single", "single-paywalled"),
            ("single-post", "single-paywalled-post"),
            ("single-post-my-story.php", "single-paywalled-post-my-story.php"),
            ("blog/single.html", "blog/single-paywalled.html"),
            ("themes/blog/single-post.html", "themes/blog/single-paywalled-post.html"),
        ],
    )
    def test_suffix_follows_leading_prefix(self, selector, name, expected):
        assert selector.blocked_variant(name, "single") == expected

    @pytest.mark.parametrize(
        "name,prefix,expected",
        [
            ("blog/single-post.html", "blog/single", "blog/single-paywalled-post.html"),
            ("blog/single.html", "blog/single", "blog/single-paywalled.html"),
            ("single/index.html", "single", "single-paywalled/index.html"),
        ],
    )
    def test_prefix_matched_against_whole_name(self, selector, name, prefix, expected):
        assert selector.blocked_variant(name, prefix) == expected

    def test_only_leading_occurrence_is_replaced(self, selector):
        assert selector.blocked_variant("single-single", "single") == "single-paywalled-single"

    @pytest.mark.parametrize("name", ["index", "page-single", "blog/index.html", ""])
    def test_names_without_leading_prefix_have_no_variant(self, selector, name):
        assert selector.blocked_variant(name, "single") is None

    def test_empty_prefix_has_no_variant(self, selector):
        assert selector.blocked_variant("single", "") is None

    def test_custom_suffix(self):
        selector = TemplateSelector(GateConfig(template_suffix="_locked"))
        assert selector.blocked_variant("article_detail.html", "article") == "article_locked_detail.html"


class TestSelect:
    def test_granted_returns_candidates_unchanged(self, selector):
        candidates = ["single-post", "single", "index"]
        assert selector.select(candidates, "single", granted=True) == candidates

    def test_granted_does_not_mutate_input(self, selector):
        candidates = ("single-post", "single")
        result = selector.select(candidates, "single", granted=True)
        assert result == ["single-post", "single"]
        assert candidates == ("single-post", "single")

    def test_denied_prepends_blocked_variants_in_order(self, selector):
        candidates = ["single-post", "single", "index"]
        assert selector.select(candidates, "single", granted=False) == [
            "single-paywalled-post",
            "single-paywalled",
            "single-post",
            "single",
            "index",
        ]

    def test_denied_keeps_original_candidates_as_fallback(self, selector):
        candidates = ["blog/single-post.html", "blog/single.html"]
        result = selector.select(candidates, "single", granted=False)
        assert result[len(result) - len(candidates):] == candidates

    def test_denied_with_directory_prefix(self, selector):
        candidates = ["blog/single-post.html", "blog/single.html"]
        assert selector.select(candidates, "blog/single", granted=False) == [
            "blog/single-paywalled-post.html",
            "blog/single-paywalled.html",
            "blog/single-post.html",
            "blog/single.html",
        ]

    def test_denied_with_no_matching_names(self, selector):
        assert selector.select(["index"], "single", granted=False) == ["index"]

    def test_denied_with_empty_candidates(self, selector):
        assert selector.select([], "single", granted=False) == []


class TestSelectFunction:
    def test_with_explicit_config(self):
        config = GateConfig(template_suffix="-members-only")
        assert select(["single"], "single", False, config=config) == [
            "single-members-only",
            "single",
        ]

    def test_uses_settings_config_by_default(self):
        assert select(["single"], "single", False) == ["single-paywalled", "single"]
