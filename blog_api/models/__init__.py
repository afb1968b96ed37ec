"""
Models for django-blog-api.

All models are importable from blog_api.models:

    from blog_api.models import Post, Category, Comment
"""
from .posts import Category, Post, slugify_title
from .comments import Comment

__all__ = [
    "Category",
    "Post",
    "Comment",
    "slugify_title",
]
