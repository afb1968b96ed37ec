"""
Django admin configuration for blog_api.
"""
from django.contrib import admin

from .models import Category, Comment, Post


class CommentInline(admin.TabularInline):
    """Inline for moderating comments on a post."""

    model = Comment
    extra = 0
    raw_id_fields = ["author"]
    fields = ["author", "content", "created_at"]
    readonly_fields = ["created_at"]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "post_count", "created_at"]
    search_fields = ["name", "description"]
    readonly_fields = ["created_at"]

    def post_count(self, obj):
        return obj.posts.count()


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ["title_preview", "author", "category", "comment_count", "created_at"]
    list_filter = ["category", "created_at"]
    search_fields = ["title", "content", "author__username"]
    raw_id_fields = ["author", "category"]
    date_hierarchy = "created_at"
    inlines = [CommentInline]
    readonly_fields = ["slug", "created_at", "updated_at"]

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "content", "author")
        }),
        ("Taxonomy", {
            "fields": ("category", "featured_image")
        }),
        ("Metadata", {
            "fields": ("created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    title_preview.short_description = "Title"

    def comment_count(self, obj):
        return obj.comments.count()


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ["preview", "author", "post", "created_at"]
    search_fields = ["content", "author__username", "post__title"]
    raw_id_fields = ["author", "post"]
    readonly_fields = ["created_at"]
