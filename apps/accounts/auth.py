from __future__ import annotations

import logging
from functools import wraps

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import check_password
from django.http import HttpRequest

from apps.common.errors import UnauthorizedError
from .tokens import read_admin_token, read_member_token

logger = logging.getLogger(__name__)

_RAW_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def _encoded_admin_hash() -> str:
    encoded = (getattr(settings, "ADMIN_PASSWORD_HASH", "") or "").strip()
    # Hashes produced by plain bcrypt tooling lack Django's algorithm prefix
    if encoded.startswith(_RAW_BCRYPT_PREFIXES):
        encoded = f"bcrypt${encoded}"
    return encoded


def verify_admin_password(password: str) -> bool:
    encoded = _encoded_admin_hash()
    if not encoded:
        logger.error("ADMIN_PASSWORD_HASH is not set")
        return False
    if not password:
        return False
    try:
        return check_password(password, encoded)
    except ValueError:
        logger.exception("Admin password verification error")
        return False


def bearer_token(request: HttpRequest) -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def is_admin_request(request: HttpRequest) -> bool:
    return read_admin_token(bearer_token(request))


def require_admin(view):
    @wraps(view)
    def _wrapped(request, *args, **kwargs):
        if not is_admin_request(request):
            raise UnauthorizedError()
        return view(request, *args, **kwargs)

    return _wrapped


def member_from_request(request: HttpRequest):
    cookie_name = getattr(settings, "MEMBER_COOKIE_NAME", "auth-token")
    data = read_member_token(request.COOKIES.get(cookie_name, ""))
    if not data:
        return None
    return get_user_model().objects.filter(pk=data["uid"], is_active=True).first()
