"""
Tests for the JSON HTTP API.
"""
import json

import pytest
from django.contrib import admin
from django.core.files.uploadedfile import SimpleUploadedFile

from blog_api import services
from blog_api.exceptions import InternalError
from blog_api.models import Category, Comment, Post
from blog_api.tokens import decode_access_token


def post_json(client, url, payload, **extra):
    return client.post(url, data=json.dumps(payload), content_type="application/json", **extra)


def put_json(client, url, payload, **extra):
    return client.put(url, data=json.dumps(payload), content_type="application/json", **extra)


class TestAuthEndpoints:
    """Tests for /api/auth/."""

    def test_register(self, client, db):
        response = post_json(client, "/api/auth/register", {
            "username": "alice",
            "email": "alice@example.com",
            "password": "secret123",
        })

        assert response.status_code == 201
        assert response.json() == {"success": True, "message": "User registered successfully"}

    def test_register_duplicate(self, client, user):
        response = post_json(client, "/api/auth/register", {
            "username": "testuser",
            "email": "new@example.com",
            "password": "secret123",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "Username or email already exists"

    def test_register_invalid(self, client, db):
        response = post_json(client, "/api/auth/register", {
            "username": "alice",
            "email": "alice@example.com",
            "password": "123",
        })

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Password must be at least 6 characters",
        }

    def test_login(self, client, user):
        response = post_json(client, "/api/auth/login", {
            "username": "testuser",
            "password": "testpass123",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert decode_access_token(data["token"])["user_id"] == user.pk
        assert data["user"]["username"] == "testuser"
        assert "password" not in data["user"]

    def test_login_wrong_password(self, client, user):
        response = post_json(client, "/api/auth/login", {
            "username": "testuser",
            "password": "wrong-password",
        })

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    def test_malformed_json(self, client, db):
        response = client.post(
            "/api/auth/login", data="{not json", content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Request body must be a JSON object"

    def test_json_array_body(self, client, db):
        response = post_json(client, "/api/auth/login", ["testuser", "pw"])
        assert response.status_code == 400


class TestCategoryEndpoints:
    def test_list(self, client, category):
        response = client.get("/api/categories")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Test Category"]

    def test_create(self, client, db):
        response = post_json(client, "/api/categories", {"name": "News", "description": "Daily"})

        assert response.status_code == 201
        assert response.json()["name"] == "News"
        assert Category.objects.filter(name="News").exists()

    def test_create_duplicate(self, client, category):
        response = post_json(client, "/api/categories", {"name": category.name})

        assert response.status_code == 400
        assert response.json()["error"] == "Category already exists"


class TestPostEndpoints:
    """Tests for /api/posts."""

    def test_list_resolves_relations(self, client, post):
        response = client.get("/api/posts")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["page"] == 1
        assert data["pages"] == 1
        assert data["limit"] == 10
        item = data["posts"][0]
        assert item["category"]["name"] == "Test Category"
        assert item["author"]["username"] == "testuser"
        assert "password" not in item["author"]

    def test_list_query_params(self, client, user, category):
        for i in range(12):
            Post.objects.create(title=f"Post {i}", content="x", author=user, category=category)

        data = client.get("/api/posts", {"page": "1", "limit": "5"}).json()

        assert len(data["posts"]) == 5
        assert data["pages"] == 3

    def test_list_search(self, client, user, category):
        Post.objects.create(title="Plain", content="secret ingredient", author=user, category=category)
        Post.objects.create(title="Other", content="nothing", author=user, category=category)

        data = client.get("/api/posts", {"search": "INGREDIENT"}).json()

        assert [p["title"] for p in data["posts"]] == ["Plain"]

    def test_list_huge_page_and_limit(self, client, post):
        response = client.get("/api/posts", {
            "page": "99999999999999999999",
            "limit": "99999999999999999999",
        })

        assert response.status_code == 200
        assert response.json()["posts"] == []
        assert response.json()["limit"] == 100

    def test_detail_out_of_range_id(self, client, db):
        response = client.get("/api/posts/99999999999999999999")
        assert response.status_code == 400

    def test_list_bad_category(self, client, db):
        response = client.get("/api/posts", {"category": "abc"})
        assert response.status_code == 400

    def test_detail_includes_comments(self, client, post, user):
        post.add_comment(user.pk, "First!")

        response = client.get(f"/api/posts/{post.pk}")

        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "test-post"
        assert data["comments"][0]["content"] == "First!"
        assert data["comments"][0]["author"] == {"id": user.pk, "username": "testuser"}

    def test_detail_not_found(self, client, db):
        response = client.get("/api/posts/9999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Post not found"}

    def test_detail_invalid_id(self, client, db):
        response = client.get("/api/posts/abc")
        assert response.status_code == 400

    def test_create_requires_token(self, client, category):
        response = post_json(client, "/api/posts", {
            "title": "T", "content": "C", "category": category.pk,
        })

        assert response.status_code == 401
        assert not Post.objects.exists()

    def test_create_rejects_bad_token(self, client, category):
        response = post_json(
            client, "/api/posts",
            {"title": "T", "content": "C", "category": category.pk},
            HTTP_AUTHORIZATION="Bearer not.a.token",
        )
        assert response.status_code == 401

    def test_create(self, client, user, category, auth_headers):
        response = post_json(client, "/api/posts", {
            "title": "Hello, World! 2024",
            "content": "Body",
            "category": category.pk,
            "featuredImage": "/media/uploads/image-1.png",
        }, **auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "hello-world-2024"
        assert data["featuredImage"] == "/media/uploads/image-1.png"
        assert data["author"]["id"] == user.pk

    def test_create_unknown_category(self, client, auth_headers):
        response = post_json(client, "/api/posts", {
            "title": "T", "content": "C", "category": 9999,
        }, **auth_headers)

        assert response.status_code == 404
        assert not Post.objects.exists()

    def test_create_missing_title(self, client, category, auth_headers):
        response = post_json(client, "/api/posts", {
            "content": "C", "category": category.pk,
        }, **auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Title is required"

    def test_create_rejects_non_string_fields(self, client, category, auth_headers):
        response = post_json(client, "/api/posts", {
            "title": {"x": 1}, "content": ["a"], "category": category.pk,
        }, **auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Title is required"
        assert not Post.objects.exists()

    def test_update_rejects_non_string_title(self, client, post, auth_headers):
        response = put_json(client, f"/api/posts/{post.pk}", {"title": 5}, **auth_headers)

        assert response.status_code == 400
        post.refresh_from_db()
        assert post.title == "Test Post"

    def test_update(self, client, post, auth_headers):
        response = put_json(client, f"/api/posts/{post.pk}", {"content": "Edited"}, **auth_headers)

        assert response.status_code == 200
        assert response.json()["content"] == "Edited"
        assert response.json()["title"] == "Test Post"

    def test_update_requires_token(self, client, post):
        response = put_json(client, f"/api/posts/{post.pk}", {"content": "Edited"})
        assert response.status_code == 401

    def test_update_not_found(self, client, auth_headers):
        response = put_json(client, "/api/posts/9999", {"title": "x"}, **auth_headers)
        assert response.status_code == 404

    def test_update_forbidden_with_ownership_policy(self, client, post, other_auth_headers, settings):
        settings.BLOG_API = {"REQUIRE_POST_OWNERSHIP": True}

        response = put_json(client, f"/api/posts/{post.pk}", {"title": "Mine now"}, **other_auth_headers)

        assert response.status_code == 403

    def test_delete(self, client, post, auth_headers):
        response = client.delete(f"/api/posts/{post.pk}", **auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Post deleted"}
        assert not Post.objects.exists()

    def test_delete_not_found(self, client, auth_headers):
        response = client.delete("/api/posts/9999", **auth_headers)
        assert response.status_code == 404

    def test_method_not_allowed(self, client, db):
        response = client.patch("/api/posts")

        assert response.status_code == 405
        assert response.json() == {"success": False, "error": "Method not allowed"}
        assert "GET" in response["Allow"]
        assert "PATCH" not in response["Allow"]


class TestUploadEndpoint:
    def test_upload(self, client, auth_headers, settings, tmp_path):
        settings.MEDIA_ROOT = str(tmp_path)
        image = SimpleUploadedFile("cover.jpg", b"jpeg bytes", content_type="image/jpeg")

        response = client.post("/api/posts/upload", {"image": image}, **auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["filePath"].startswith("/media/uploads/image-")
        assert data["filePath"].endswith(".jpg")

    def test_upload_without_file(self, client, auth_headers):
        response = client.post("/api/posts/upload", {}, **auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "No file uploaded"

    def test_upload_requires_token(self, client, db):
        image = SimpleUploadedFile("cover.jpg", b"jpeg bytes")
        response = client.post("/api/posts/upload", {"image": image})
        assert response.status_code == 401


class TestCommentEndpoints:
    """Tests for /api/posts/<id>/comments."""

    def test_add_and_list(self, client, post, auth_headers):
        response = post_json(client, f"/api/posts/{post.pk}/comments", {"content": "Hi"}, **auth_headers)

        assert response.status_code == 201
        assert response.json()["success"] is True
        assert response.json()["comment"]["content"] == "Hi"

        listing = client.get(f"/api/posts/{post.pk}/comments").json()
        assert listing["comments"][0]["author"]["username"] == "testuser"

    def test_add_requires_token(self, client, post):
        response = post_json(client, f"/api/posts/{post.pk}/comments", {"content": "Hi"})
        assert response.status_code == 401

    def test_add_empty(self, client, post, auth_headers):
        response = post_json(client, f"/api/posts/{post.pk}/comments", {"content": ""}, **auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Content is required"

    def test_add_to_missing_post(self, client, auth_headers):
        response = post_json(client, "/api/posts/9999/comments", {"content": "Hi"}, **auth_headers)
        assert response.status_code == 404

    def test_list_missing_post(self, client, db):
        response = client.get("/api/posts/9999/comments")
        assert response.status_code == 404

    def test_list_orphaned_comment(self, client, post, other_user):
        post.add_comment(other_user.pk, "Bye")
        other_user.delete()

        listing = client.get(f"/api/posts/{post.pk}/comments").json()

        assert listing["comments"][0]["author"] is None

    def test_delete_as_author(self, client, post, user, auth_headers):
        comment = post.add_comment(user.pk, "Oops")

        response = client.delete(f"/api/posts/{post.pk}/comments/{comment.pk}", **auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Comment deleted"}
        assert client.get(f"/api/posts/{post.pk}/comments").json() == {"comments": []}

    def test_delete_as_someone_else(self, client, post, user, other_auth_headers):
        comment = post.add_comment(user.pk, "Not yours")

        response = client.delete(
            f"/api/posts/{post.pk}/comments/{comment.pk}", **other_auth_headers,
        )

        assert response.status_code == 403
        assert response.json()["error"] == "You are not authorized to delete this comment"
        assert Comment.objects.filter(pk=comment.pk).exists()

    def test_delete_missing_comment(self, client, post, auth_headers):
        response = client.delete(f"/api/posts/{post.pk}/comments/9999", **auth_headers)
        assert response.status_code == 404


class TestErrorHandling:
    def test_unexpected_error_is_generic(self, client, db, monkeypatch):
        def boom(**kwargs):
            raise RuntimeError("database exploded")

        monkeypatch.setattr(services, "list_posts", boom)

        response = client.get("/api/posts")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}
        assert InternalError.default_message == "Internal server error"
        assert "database exploded" not in response.content.decode()


class TestAdmin:
    @pytest.mark.parametrize("model", [Category, Post, Comment])
    def test_registered(self, model):
        assert model in admin.site._registry
