"""
Shared fixtures for blog-platform tests.
"""
import json

import pytest
from django.contrib.auth import get_user_model
from django.test import Client

from blog_platform.auth import issue_token
from blog_platform.models import Blog, Category

User = get_user_model()

API = "/api/v1"


class ApiClient(Client):
    """Test client that sends JSON bodies and can carry a bearer token."""

    def __init__(self, token=None, **kwargs):
        super().__init__(**kwargs)
        if token:
            self.defaults["HTTP_AUTHORIZATION"] = f"Bearer {token}"

    def _json(self, method, path, data=None):
        return method(
            API + path,
            data=json.dumps(data or {}),
            content_type="application/json",
        )

    def get_api(self, path, params=None):
        return self.get(API + path, params or {})

    def post_api(self, path, data=None):
        return self._json(self.post, path, data)

    def patch_api(self, path, data=None):
        return self._json(self.patch, path, data)

    def delete_api(self, path):
        return self.delete(API + path)


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username="testuser",
        email="test@example.com",
        password="testpass123",
        first_name="Test",
        last_name="User",
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        username="other",
        email="other@example.com",
        password="otherpass123",
    )


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(name="Test Category", slug="test-category")


@pytest.fixture
def blog(db, user, category):
    """Create a public test blog."""
    return Blog.objects.create(
        title="Test Blog",
        content="This is a test blog body.",
        author=user,
        category=category,
    )


@pytest.fixture
def anon_client():
    return ApiClient()


@pytest.fixture
def api_client(user):
    """Client authenticated as ``user``."""
    return ApiClient(token=issue_token(user))


@pytest.fixture
def other_client(other_user):
    """Client authenticated as ``other_user``."""
    return ApiClient(token=issue_token(other_user))
