"""
Shared fixtures for the django-blog-api test suite.
"""
import pytest
from django.contrib.auth import get_user_model

from blog_api.models import Category, Post
from blog_api.tokens import create_access_token

User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username="testuser",
        email="test@example.com",
        password="testpass123",
    )


@pytest.fixture
def other_user(db):
    """Create a second user who owns nothing."""
    return User.objects.create_user(
        username="other",
        email="other@example.com",
        password="otherpass123",
    )


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(name="Test Category", description="For tests")


@pytest.fixture
def post(db, user, category):
    """Create a test post."""
    return Post.objects.create(
        title="Test Post",
        content="This is a test post body.",
        author=user,
        category=category,
    )


@pytest.fixture
def auth_headers(user):
    """Authorization header for ``user``, in test client form."""
    return {"HTTP_AUTHORIZATION": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def other_auth_headers(other_user):
    return {"HTTP_AUTHORIZATION": f"Bearer {create_access_token(other_user)}"}
