"""
Comment model for django-blog-api.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone


class Comment(models.Model):
    """
    Comment on a post.

    Comments are owned by their post: they are listed in insertion order
    and deleted along with it.
    """

    post = models.ForeignKey(
        "blog_api.Post",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name="blog_comments",
    )
    content = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["post", "created_at"], name="blog_api_comment_post_idx"),
        ]

    def __str__(self):
        return f"Comment by {self.author} on {self.post}"

    @property
    def preview(self):
        """Return truncated content for admin display."""
        if len(self.content) > 100:
            return self.content[:100] + "..."
        return self.content

    def can_delete(self, user_id):
        """Only the comment's author may delete it."""
        return self.author_id is not None and self.author_id == user_id
