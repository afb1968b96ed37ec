"""
JSON shapes returned by the API.
"""


def _timestamp(value):
    return value.isoformat() if value else None


def serialize_user(user):
    """Public view of a user. The password hash is never included."""
    if user is None:
        return None
    return {
        "id": user.pk,
        "username": user.get_username(),
        "email": user.email,
        "createdAt": _timestamp(getattr(user, "date_joined", None)),
    }


def serialize_category(category):
    if category is None:
        return None
    return {
        "id": category.pk,
        "name": category.name,
        "description": category.description,
        "createdAt": _timestamp(category.created_at),
    }


def serialize_comment(comment):
    # Author is reduced to id and username
    author = comment.author
    return {
        "id": comment.pk,
        "content": comment.content,
        "createdAt": _timestamp(comment.created_at),
        "author": {"id": author.pk, "username": author.get_username()} if author else None,
    }


def serialize_post(post, comments=None):
    """
    Serialize a post with its category and author resolved.

    Pass ``comments`` to embed them (post detail); listings leave them out.
    """
    data = {
        "id": post.pk,
        "title": post.title,
        "content": post.content,
        "slug": post.slug,
        "featuredImage": post.featured_image,
        "category": serialize_category(post.category),
        "author": serialize_user(post.author),
        "createdAt": _timestamp(post.created_at),
        "updatedAt": _timestamp(post.updated_at),
    }
    if comments is not None:
        data["comments"] = [serialize_comment(comment) for comment in comments]
    return data
