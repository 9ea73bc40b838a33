"""Signed, expiring tokens for member sessions and the admin gate."""

from __future__ import annotations

from django.conf import settings
from django.core import signing

MEMBER_SALT = "accounts.member"
ADMIN_SALT = "accounts.admin"


def make_member_token(user) -> str:
    return signing.dumps({"uid": str(user.id), "email": user.email}, salt=MEMBER_SALT)


def read_member_token(token: str) -> dict | None:
    if not token:
        return None
    try:
        data = signing.loads(token, salt=MEMBER_SALT, max_age=settings.MEMBER_TOKEN_MAX_AGE)
    except signing.BadSignature:
        # SignatureExpired is a BadSignature too
        return None
    return data if isinstance(data, dict) and data.get("uid") else None


def make_admin_token() -> str:
    return signing.dumps({"role": "admin"}, salt=ADMIN_SALT)


def read_admin_token(token: str) -> bool:
    if not token:
        return False
    try:
        data = signing.loads(token, salt=ADMIN_SALT, max_age=settings.ADMIN_TOKEN_MAX_AGE)
    except signing.BadSignature:
        return False
    return isinstance(data, dict) and data.get("role") == "admin"
