"""
Configuration settings for django-blog-api.

Override these in your Django settings.py:

    BLOG_API = {
        'POSTS_PER_PAGE': 20,
        'TOKEN_LIFETIME': timedelta(hours=12),
        'REQUIRE_POST_OWNERSHIP': True,
        ...
    }
"""
from datetime import timedelta

from django.conf import settings

DEFAULTS = {
    # Posts
    "POSTS_PER_PAGE": 10,
    "MAX_POSTS_PER_PAGE": 100,
    "SLUG_MAX_LENGTH": 255,
    # Only the author may edit or delete a post when enabled
    "REQUIRE_POST_OWNERSHIP": False,

    # Comments
    "COMMENT_MAX_LENGTH": 5000,

    # Accounts
    "PASSWORD_MIN_LENGTH": 6,

    # Bearer tokens
    "TOKEN_LIFETIME": timedelta(days=1),
    "TOKEN_ALGORITHM": "HS256",
    "TOKEN_SECRET": None,  # falls back to settings.SECRET_KEY

    # Uploads
    "UPLOAD_PATH": "uploads/",
    "UPLOAD_FIELD_NAME": "image",
}


class BlogAPISettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blog_api.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blog_api setting: {name}")

        user_settings = getattr(settings, "BLOG_API", {})
        return user_settings.get(name, DEFAULTS[name])

    @property
    def token_secret(self):
        """Return the key used to sign bearer tokens."""
        return self.TOKEN_SECRET or settings.SECRET_KEY


blog_settings = BlogAPISettings()
