"""
JSON views for django-blog-api.
"""
import json
import logging

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from . import auth, services
from .conf import blog_settings
from .exceptions import BlogAPIError, InternalError, ValidationError
from .serializers import serialize_category, serialize_comment, serialize_post, serialize_user

logger = logging.getLogger(__name__)


def error_response(message, status):
    return JsonResponse({"success": False, "error": message}, status=status)


def json_body(request):
    """Parse the request body as a JSON object; an empty body is ``{}``."""
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except ValueError:
        raise ValidationError("Request body must be a JSON object")
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


@method_decorator(csrf_exempt, name="dispatch")
class APIView(View):
    """
    Base view for the JSON API.

    Methods listed in ``protected_methods`` need a valid bearer token; the
    caller's id is then available as ``request.user_id``. Errors raised by
    services become JSON error responses.
    """

    protected_methods = ()

    def dispatch(self, request, *args, **kwargs):
        try:
            if request.method in self.protected_methods:
                auth.authenticate_request(request)
            return super().dispatch(request, *args, **kwargs)
        except BlogAPIError as exc:
            return error_response(exc.message, exc.status_code)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            exc = InternalError()
            return error_response(exc.message, exc.status_code)

    def http_method_not_allowed(self, request, *args, **kwargs):
        logger.warning("Method not allowed (%s): %s", request.method, request.path)
        response = error_response("Method not allowed", 405)
        response["Allow"] = ", ".join(self._allowed_methods())
        return response


class RegisterView(APIView):
    def post(self, request):
        data = json_body(request)
        auth.register(data.get("username"), data.get("email"), data.get("password"))
        return JsonResponse(
            {"success": True, "message": "User registered successfully"},
            status=201,
        )


class LoginView(APIView):
    def post(self, request):
        data = json_body(request)
        token, user = auth.login(data.get("username"), data.get("password"))
        return JsonResponse({
            "success": True,
            "token": token,
            "user": serialize_user(user),
        })


class CategoryListView(APIView):
    """List and create categories."""

    def get(self, request):
        categories = services.list_categories()
        return JsonResponse([serialize_category(c) for c in categories], safe=False)

    def post(self, request):
        data = json_body(request)
        category = services.create_category(data.get("name"), data.get("description"))
        return JsonResponse(serialize_category(category), status=201)


class PostListView(APIView):
    """Paginated post listing; authenticated users may create posts."""

    protected_methods = ("POST",)

    def get(self, request):
        result = services.list_posts(
            page=request.GET.get("page"),
            limit=request.GET.get("limit"),
            search=request.GET.get("search"),
            category_id=request.GET.get("category"),
        )
        result["posts"] = [serialize_post(post) for post in result["posts"]]
        return JsonResponse(result)

    def post(self, request):
        data = json_body(request)
        post = services.create_post(
            author_id=request.user_id,
            title=data.get("title"),
            content=data.get("content"),
            category_id=data.get("category"),
            featured_image=data.get("featuredImage"),
        )
        return JsonResponse(serialize_post(post), status=201)


class PostDetailView(APIView):
    """Retrieve, update or delete a single post."""

    protected_methods = ("PUT", "DELETE")

    def get(self, request, pk):
        post = services.get_post(pk)
        comments = post.comments.select_related("author")
        return JsonResponse(serialize_post(post, comments=comments))

    def put(self, request, pk):
        post = services.update_post(pk, json_body(request), caller_id=request.user_id)
        return JsonResponse(serialize_post(post))

    def delete(self, request, pk):
        services.delete_post(pk, caller_id=request.user_id)
        return JsonResponse({"success": True, "message": "Post deleted"})


class ImageUploadView(APIView):
    protected_methods = ("POST",)

    def post(self, request):
        uploaded = request.FILES.get(blog_settings.UPLOAD_FIELD_NAME)
        file_path = services.upload_image(uploaded)
        return JsonResponse({"success": True, "filePath": file_path}, status=201)


class CommentListView(APIView):
    """List a post's comments; authenticated users may add one."""

    protected_methods = ("POST",)

    def get(self, request, pk):
        comments = services.list_comments(pk)
        return JsonResponse({"comments": [serialize_comment(c) for c in comments]})

    def post(self, request, pk):
        data = json_body(request)
        comment = services.add_comment(pk, request.user_id, data.get("content"))
        return JsonResponse(
            {"success": True, "comment": serialize_comment(comment)},
            status=201,
        )


class CommentDetailView(APIView):
    protected_methods = ("DELETE",)

    def delete(self, request, post_pk, comment_pk):
        services.delete_comment(post_pk, comment_pk, request.user_id)
        return JsonResponse({"success": True, "message": "Comment deleted"})
