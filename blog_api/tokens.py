"""
Signed bearer tokens.

Tokens are HS256 JWTs carrying the user id and username. They expire
after ``TOKEN_LIFETIME`` and are verified statelessly on every request.
"""
from datetime import datetime, timezone

import jwt

from .conf import blog_settings
from .exceptions import AuthError


def create_access_token(user, lifetime=None):
    """Issue a signed token for ``user``."""
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user.pk,
        "username": user.get_username(),
        "iat": now,
        "exp": now + (lifetime or blog_settings.TOKEN_LIFETIME),
    }
    return jwt.encode(
        payload,
        blog_settings.token_secret,
        algorithm=blog_settings.TOKEN_ALGORITHM,
    )


def decode_access_token(token):
    """
    Verify ``token`` and return its claims.

    Raises AuthError when the token is expired, tampered with or does not
    carry a user id.
    """
    try:
        payload = jwt.decode(
            token,
            blog_settings.token_secret,
            algorithms=[blog_settings.TOKEN_ALGORITHM],
            options={"require": ["exp", "user_id"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except jwt.PyJWTError:
        raise AuthError("Invalid token")
    return payload
