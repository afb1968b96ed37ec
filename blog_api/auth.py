"""
Account registration, login and bearer-token authentication.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Q

from .exceptions import AuthError, ConflictError
from .forms import LoginForm, RegisterForm, validate
from .tokens import create_access_token, decode_access_token

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def register(username, email, password):
    """
    Create a new account with a hashed password.

    Raises ValidationError for a missing or malformed field and
    ConflictError when the username or email is already taken.
    """
    data = validate(RegisterForm, {"username": username, "email": email, "password": password})
    username, email, password = data["username"], data["email"], data["password"]

    User = get_user_model()
    if User.objects.filter(Q(username=username) | Q(email__iexact=email)).exists():
        raise ConflictError("Username or email already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=username,
                email=email,
                password=password,
            )
    except IntegrityError:
        raise ConflictError("Username or email already exists")

    logger.info("Registered user %s (id=%s)", user.username, user.pk)
    return user


def login(username_or_email, password):
    """
    Check credentials and issue a bearer token.

    Returns ``(token, user)``. Unknown users and wrong passwords raise the
    same AuthError.
    """
    data = validate(LoginForm, {"username": username_or_email, "password": password})
    username_or_email, password = data["username"], data["password"]

    User = get_user_model()
    user = (
        User.objects.filter(Q(username=username_or_email) | Q(email__iexact=username_or_email))
        .order_by("pk")
        .first()
    )
    if user is None:
        # Hash anyway so response time does not reveal whether the user exists
        User().set_password(password)
        logger.warning("Failed login for unknown user %r", username_or_email)
        raise AuthError(INVALID_CREDENTIALS)

    if not user.check_password(password) or not user.is_active:
        logger.warning("Failed login for user id=%s", user.pk)
        raise AuthError(INVALID_CREDENTIALS)

    return create_access_token(user), user


def parse_authorization_header(header):
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not header:
        raise AuthError("No token, authorization denied")
    scheme, _, token = header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthError("Invalid authorization header")
    return token


def authenticate(token):
    """
    Verify a bearer token and return the id of the user it names.

    Raises AuthError when the token is missing, invalid, expired or points
    at an account that no longer exists.
    """
    if not token:
        raise AuthError("No token, authorization denied")

    payload = decode_access_token(token)
    user_id = payload["user_id"]

    User = get_user_model()
    if not User.objects.filter(pk=user_id, is_active=True).exists():
        logger.warning("Token for missing or inactive user id=%s", user_id)
        raise AuthError("Invalid token")
    return user_id


def authenticate_request(request):
    """
    Authenticate ``request`` from its Authorization header.

    On success the user id is stored on ``request.user_id``.
    """
    token = parse_authorization_header(request.headers.get("Authorization"))
    request.user_id = authenticate(token)
    return request.user_id
