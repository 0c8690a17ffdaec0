import django
import pytest
from django.conf import settings


TEMPLATES = {
    "tests/article_detail.html": "normal:{{ object.title }}",
    "tests/article-paywalled_detail.html": "blocked:{{ object.title }}:{{ content_blocked }}",
    "blog/single-post.html": "single-post",
    "blog/single-paywalled.html": "single-paywalled",
    "blog/single.html": "single",
    "teaser.html": (
        "{% load blocked_content %}"
        "{% if article|user_can_access:user %}full{% else %}teaser{% endif %}"
    ),
}


def pytest_configure():
    if not settings.configured:
        settings.configure(
            DEBUG=True,
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                }
            },
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "django_blocked_content",
                "tests",
            ],
            TEMPLATES=[
                {
                    "BACKEND": "django.template.backends.django.DjangoTemplates",
                    "OPTIONS": {
                        "loaders": [
                            ("django.template.loaders.locmem.Loader", TEMPLATES),
                        ],
                    },
                }
            ],
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
            USE_TZ=True,
            SECRET_KEY="test-secret-key-for-blocked-content",
        )
    django.setup()


@pytest.fixture
def config():
    """Default gate configuration."""
    from django_blocked_content.conf import GateConfig

    return GateConfig()


@pytest.fixture
def user(db):
    """Create a test user with no groups."""
    from django.contrib.auth import get_user_model
    User = get_user_model()
    return User.objects.create_user(
        username="testuser",
        email="test@example.com",
        password="testpass123",
    )


@pytest.fixture
def member(db):
    """Create a user factory that assigns the given role groups."""
    from django.contrib.auth import get_user_model
    from django.contrib.auth.models import Group

    User = get_user_model()

    def make_member(username, *roles):
        user = User.objects.create_user(username=username, password="testpass123")
        for role in roles:
            group, _ = Group.objects.get_or_create(name=role)
            user.groups.add(group)
        return user

    return make_member


@pytest.fixture
def article(db):
    """Create an article factory keyed by access level."""
    from tests.models import Article

    def make_article(access_level=None, slug="story", title="Story"):
        metadata = {} if access_level is None else {"_access_level": access_level}
        return Article.objects.create(slug=slug, title=title, metadata=metadata)

    return make_article
