"""
URL configuration for django-blog-api.

Include in your project urls.py:

    path('api/', include('blog_api.urls')),
"""
from django.urls import path

from . import views

app_name = "blog_api"

urlpatterns = [
    # Accounts
    path("auth/register", views.RegisterView.as_view(), name="register"),
    path("auth/login", views.LoginView.as_view(), name="login"),

    # Categories
    path("categories", views.CategoryListView.as_view(), name="category_list"),

    # Posts; upload must come before the <pk> routes
    path("posts", views.PostListView.as_view(), name="post_list"),
    path("posts/upload", views.ImageUploadView.as_view(), name="image_upload"),
    path("posts/<str:pk>", views.PostDetailView.as_view(), name="post_detail"),

    # Comments
    path("posts/<str:pk>/comments", views.CommentListView.as_view(), name="comment_list"),
    path(
        "posts/<str:post_pk>/comments/<str:comment_pk>",
        views.CommentDetailView.as_view(),
        name="comment_detail",
    ),
]
