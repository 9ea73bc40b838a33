from __future__ import annotations

import logging
import re
import uuid

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET, require_POST

from apps.common import errors
from apps.common.api import client_ip, json_view, parse_json
from apps.common.rate_limit import enforce
from .auth import member_from_request, verify_admin_password
from .tokens import make_admin_token, make_member_token

User = get_user_model()
logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LEN = 6
MIN_NAME_LEN = 2


def _normalize_email(email) -> str:
    return str(email or "").strip().lower()


def _set_member_cookie(resp: JsonResponse, user) -> JsonResponse:
    resp.set_cookie(
        getattr(settings, "MEMBER_COOKIE_NAME", "auth-token"),
        make_member_token(user),
        max_age=settings.MEMBER_TOKEN_MAX_AGE,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="Lax",
    )
    return resp


@require_POST
@json_view
def signup(request: HttpRequest) -> JsonResponse:
    data = parse_json(request)
    email = _normalize_email(data.get("email"))
    password = str(data.get("password") or "")
    name = str(data.get("name") or "").strip()

    if not email or not password or not name:
        raise errors.ValidationError("Email, password, and name are required")
    if not EMAIL_RE.match(email):
        raise errors.ValidationError("Invalid email format")
    if len(password) < MIN_PASSWORD_LEN:
        raise errors.ValidationError(f"Password must be at least {MIN_PASSWORD_LEN} characters long")
    if len(name) < MIN_NAME_LEN:
        raise errors.ValidationError(f"Name must be at least {MIN_NAME_LEN} characters long")
    if User.objects.filter(email__iexact=email).exists():
        raise errors.ConflictError("User with this email already exists")

    try:
        with transaction.atomic():
            # internal username, hidden from the UI
            user = User(username=f"u_{uuid.uuid4().hex[:12]}", email=email, name=name)
            user.set_password(password)
            user.save()
    except IntegrityError:
        raise errors.ConflictError("User with this email already exists")
    logger.info("Member signed up: %s", user.id)
    return JsonResponse({"message": "User created successfully", "user": user.as_dict()}, status=201)


@require_POST
@json_view
def login(request: HttpRequest) -> JsonResponse:
    enforce("member_login", client_ip(request), limit=20, window_seconds=60)
    data = parse_json(request)
    email = _normalize_email(data.get("email"))
    password = str(data.get("password") or "")
    if not email or not password:
        raise errors.ValidationError("Email and password are required")
    user = User.objects.filter(email__iexact=email, is_active=True).first()
    if not user or not user.check_password(password):
        raise errors.UnauthorizedError()
    resp = JsonResponse({"message": "Login successful", "user": user.as_dict()})
    return _set_member_cookie(resp, user)


@require_POST
@json_view
def logout(request: HttpRequest) -> JsonResponse:
    resp = JsonResponse({"message": "Logged out"})
    resp.delete_cookie(getattr(settings, "MEMBER_COOKIE_NAME", "auth-token"))
    return resp


@require_GET
@json_view
def me(request: HttpRequest) -> JsonResponse:
    user = member_from_request(request)
    if not user:
        raise errors.UnauthorizedError()
    return JsonResponse({"user": user.as_dict()})


@require_POST
@json_view
def admin_login(request: HttpRequest) -> JsonResponse:
    enforce("admin_login", client_ip(request), limit=10, window_seconds=60)
    data = parse_json(request)
    if not verify_admin_password(str(data.get("password") or "")):
        logger.warning("Admin login rejected from %s", client_ip(request))
        raise errors.UnauthorizedError()
    return JsonResponse({"token": make_admin_token(), "expires_in": settings.ADMIN_TOKEN_MAX_AGE})
