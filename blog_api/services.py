"""
Post, comment, category and upload operations.

Every operation validates its own input and raises the errors from
``blog_api.exceptions``; views only parse requests and render results.
"""
import logging
import math
import os
import uuid

from django.core.files.storage import default_storage
from django.db import IntegrityError, transaction
from django.db.models import Q

from .conf import blog_settings
from .exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from .forms import CategoryForm, CommentForm, PostForm, PostUpdateForm, validate
from .models import Category, Post

logger = logging.getLogger(__name__)

# Largest value a database integer column holds
MAX_ID = 2 ** 63 - 1


def parse_id(value, label):
    """Coerce a path or query id to a positive int, or raise ValidationError."""
    try:
        pk = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} ID")
    if not 1 <= pk <= MAX_ID:
        raise ValidationError(f"Invalid {label} ID")
    return pk


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

def list_categories():
    return list(Category.objects.all())


def create_category(name, description=""):
    data = validate(CategoryForm, {"name": name, "description": description})
    if Category.objects.filter(name=data["name"]).exists():
        raise ConflictError("Category already exists")
    try:
        with transaction.atomic():
            category = Category.objects.create(
                name=data["name"],
                description=data["description"],
            )
    except IntegrityError:
        raise ConflictError("Category already exists")
    logger.info("Created category %r (id=%s)", category.name, category.pk)
    return category


def _get_category(category_id):
    category = Category.objects.filter(pk=category_id).first()
    if category is None:
        raise NotFoundError("Category does not exist")
    return category


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------

def list_posts(page=None, limit=None, search=None, category_id=None):
    """
    Return one page of posts, newest first.

    ``page`` and ``limit`` fall back to 1 and POSTS_PER_PAGE when missing,
    non-numeric or below 1, and ``limit`` is capped at MAX_POSTS_PER_PAGE.
    ``search`` matches title or content without regard to case;
    ``category_id`` filters on an exact category.

    Returns a dict with ``posts``, ``total``, ``page``, ``pages`` and
    ``limit``.
    """
    page = _positive_int(page, 1)
    limit = min(
        _positive_int(limit, blog_settings.POSTS_PER_PAGE),
        blog_settings.MAX_POSTS_PER_PAGE,
    )

    qs = Post.objects.select_related("category", "author")
    if search and search.strip():
        term = search.strip()
        qs = qs.filter(Q(title__icontains=term) | Q(content__icontains=term))
    if category_id not in (None, ""):
        qs = qs.filter(category_id=parse_id(category_id, "category"))

    total = qs.count()
    offset = (page - 1) * limit
    return {
        "posts": list(qs[offset:offset + limit]) if offset < total else [],
        "total": total,
        "page": page,
        "pages": math.ceil(total / limit),
        "limit": limit,
    }


def get_post(post_id):
    post = (
        Post.objects.select_related("category", "author")
        .filter(pk=parse_id(post_id, "post"))
        .first()
    )
    if post is None:
        raise NotFoundError("Post not found")
    return post


def create_post(author_id, title, content, category_id, featured_image=""):
    """Create a post by ``author_id`` under an existing category."""
    data = validate(PostForm, {
        "title": title,
        "content": content,
        "category": category_id,
        "featured_image": featured_image,
    })
    category = _get_category(data["category"])
    post = Post.objects.create(
        title=data["title"],
        content=data["content"],
        category=category,
        author_id=author_id,
        featured_image=data["featured_image"],
    )
    logger.info("User id=%s created post id=%s", author_id, post.pk)
    return post


def _check_post_owner(post, caller_id):
    if blog_settings.REQUIRE_POST_OWNERSHIP and not post.is_author(caller_id):
        raise ForbiddenError("You are not authorized to modify this post")


def update_post(post_id, fields, caller_id=None):
    """
    Apply a partial update.

    ``fields`` is the client payload; only ``title``, ``content``,
    ``category`` and ``featuredImage`` are applied, and only when present.
    """
    post = get_post(post_id)
    _check_post_owner(post, caller_id)

    changes = validate(PostUpdateForm, fields)
    if "category" in changes:
        post.category = _get_category(changes.pop("category"))
    for name, value in changes.items():
        setattr(post, name, value)

    post.save()
    logger.info("User id=%s updated post id=%s", caller_id, post.pk)
    return post


def delete_post(post_id, caller_id=None):
    """Delete a post together with its comments."""
    post = get_post(post_id)
    _check_post_owner(post, caller_id)
    pk = post.pk
    with transaction.atomic():
        post.delete()
    logger.info("User id=%s deleted post id=%s", caller_id, pk)


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

def add_comment(post_id, author_id, content):
    post = get_post(post_id)
    data = validate(CommentForm, {"content": content})
    comment = post.add_comment(author_id, data["content"])
    logger.info("User id=%s commented on post id=%s", author_id, post.pk)
    return comment


def list_comments(post_id):
    post = get_post(post_id)
    return list(post.comments.select_related("author"))


def delete_comment(post_id, comment_id, caller_id):
    """
    Remove one comment from a post.

    Raises NotFoundError when the post or the comment (on that post) is
    missing, ForbiddenError when the caller did not write it.
    """
    post = get_post(post_id)
    comment = post.comments.filter(pk=parse_id(comment_id, "comment")).first()
    if comment is None:
        raise NotFoundError("Comment not found")
    if not comment.can_delete(caller_id):
        raise ForbiddenError("You are not authorized to delete this comment")
    comment.delete()
    logger.info("User id=%s deleted comment id=%s on post id=%s", caller_id, comment_id, post.pk)


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------

def upload_image(uploaded_file):
    """
    Store an uploaded file under a unique name and return its URL.

    The original extension is kept. No content-type or size checks are
    made.
    """
    if uploaded_file is None:
        raise ValidationError("No file uploaded")

    ext = os.path.splitext(uploaded_file.name or "")[1].lower()
    name = f"{blog_settings.UPLOAD_PATH}image-{uuid.uuid4().hex}{ext}"
    stored_name = default_storage.save(name, uploaded_file)
    logger.info("Stored upload %r as %s", uploaded_file.name, stored_name)
    return default_storage.url(stored_name)
