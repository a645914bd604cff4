"""
Bearer token authentication for blog-platform.

Tokens are HS256 JWTs carrying the user id (sub), issue time (iat) and
expiry (exp). They are read from the auth cookie or from an
``Authorization: Bearer`` header.
"""
import functools
import logging
from datetime import datetime, timedelta, timezone

import jwt
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser

from .api import ApiError
from .conf import blog_settings

logger = logging.getLogger(__name__)


def issue_token(user):
    """Return a signed token for user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.pk),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=blog_settings.TOKEN_LIFETIME_MINUTES)).timestamp()),
    }
    return jwt.encode(
        payload,
        blog_settings.TOKEN_SECRET,
        algorithm=blog_settings.TOKEN_ALGORITHM,
    )


def decode_token(token):
    """Verify a token and return its claims, raising ApiError(401)."""
    try:
        return jwt.decode(
            token,
            blog_settings.TOKEN_SECRET,
            algorithms=[blog_settings.TOKEN_ALGORITHM],
            options={"require": ["sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise ApiError(401, "Token has expired. Please login again")
    except jwt.ImmatureSignatureError:
        raise ApiError(401, "Token not yet valid")
    except jwt.InvalidTokenError:
        raise ApiError(401, "Invalid token. Please login again")


def get_request_token(request):
    """Return the raw token sent with request, or None."""
    token = request.COOKIES.get(blog_settings.TOKEN_COOKIE_NAME)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def authenticate(request):
    """
    Resolve the user behind the request's token.

    Raises ApiError(401) when the token is missing or invalid, when the
    user no longer exists, or when the password changed after issue.
    """
    token = get_request_token(request)
    if not token:
        raise ApiError(401, "You are not logged in")

    claims = decode_token(token)

    User = get_user_model()
    user = User.objects.filter(pk=claims["sub"], is_active=True).select_related("blog_profile").first()
    if user is None:
        logger.info("Token for unknown or inactive user %s", claims["sub"])
        raise ApiError(401, "User not found with the token")

    profile = getattr(user, "blog_profile", None)
    if profile is not None and profile.password_changed_after(claims["iat"]):
        raise ApiError(401, "User recently changed password. Please login again")

    return user


def optional_authenticate(request):
    """Like authenticate(), but returns AnonymousUser instead of failing."""
    try:
        return authenticate(request)
    except ApiError as e:
        logger.debug("Treating request as anonymous: %s", e.message)
        return AnonymousUser()


def login_required(view_method):
    """Require a valid token; sets request.user."""

    @functools.wraps(view_method)
    def wrapper(self, request, *args, **kwargs):
        request.user = authenticate(request)
        return view_method(self, request, *args, **kwargs)

    return wrapper


def optional_auth(view_method):
    """Resolve request.user from a token when one is present."""

    @functools.wraps(view_method)
    def wrapper(self, request, *args, **kwargs):
        request.user = optional_authenticate(request)
        return view_method(self, request, *args, **kwargs)

    return wrapper


def set_token_cookie(response, token):
    response.set_cookie(
        blog_settings.TOKEN_COOKIE_NAME,
        token,
        max_age=blog_settings.TOKEN_LIFETIME_MINUTES * 60,
        httponly=True,
        secure=blog_settings.TOKEN_COOKIE_SECURE,
        samesite=blog_settings.TOKEN_COOKIE_SAMESITE,
    )
    return response


def clear_token_cookie(response):
    response.delete_cookie(
        blog_settings.TOKEN_COOKIE_NAME,
        samesite=blog_settings.TOKEN_COOKIE_SAMESITE,
    )
    return response
