"""
Post and Category models for django-blog-api.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.text import slugify

from ..conf import blog_settings


def slugify_title(title):
    """
    Derive a URL-safe slug from a post title.

    Accented letters are folded to ASCII, anything else that is not a
    letter, digit, space or hyphen is dropped, and the remaining words are
    joined with single hyphens:

        >>> slugify_title("Hello, World! 2024")
        'hello-world-2024'
    """
    slug = slugify(title.replace("_", ""))
    return slug[:blog_settings.SLUG_MAX_LENGTH].strip("-")


class Category(models.Model):
    """Flat category that every post is filed under."""

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name


class Post(models.Model):
    """
    Blog post.

    Comments belong to the post (see ``Comment.post``) and are removed
    together with it.
    """

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, blank=True, db_index=True)
    content = models.TextField()
    featured_image = models.CharField(max_length=500, blank=True, default="")

    category = models.ForeignKey(
        Category,
        null=True,
        on_delete=models.SET_NULL,
        related_name="posts",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name="blog_posts",
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        # Slug always tracks the title
        self.slug = slugify_title(self.title)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "title" in update_fields:
            kwargs["update_fields"] = set(update_fields) | {"slug"}
        super().save(*args, **kwargs)

    def is_author(self, user_id):
        """Check whether the given user id wrote this post."""
        return self.author_id is not None and self.author_id == user_id

    def add_comment(self, author_id, content):
        """Append a comment by the given user and return it."""
        return self.comments.create(author_id=author_id, content=content)
