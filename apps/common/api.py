from __future__ import annotations

import json
import logging
from functools import wraps
from typing import Any

from django.db import DatabaseError
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from . import errors

logger = logging.getLogger(__name__)


def parse_json(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        data = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        raise errors.ValidationError("Invalid JSON body")
    if not isinstance(data, dict):
        raise errors.ValidationError("JSON body must be an object")
    return data


def client_ip(request: HttpRequest) -> str:
    forwarded = (request.META.get("HTTP_X_FORWARDED_FOR") or "").split(",")[0].strip()
    if forwarded:
        return forwarded
    return request.META.get("REMOTE_ADDR") or "0.0.0.0"


def error_response(exc: errors.ServiceError) -> JsonResponse:
    resp = JsonResponse({"error": exc.message}, status=exc.status)
    retry_after = getattr(exc, "retry_after", 0)
    if retry_after:
        resp["Retry-After"] = str(retry_after)
    return resp


def json_view(view):
    """Turn ServiceError into {"error": ...} responses and storage failures into a generic 500."""

    @csrf_exempt
    @wraps(view)
    def _wrapped(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except errors.ServiceError as exc:
            if exc.status >= 500:
                logger.error("%s %s failed: %s", request.method, request.path, exc.message)
            return error_response(exc)
        except DatabaseError:
            logger.exception("Database error on %s %s", request.method, request.path)
            return error_response(errors.PersistenceError())

    return _wrapped


def method_not_allowed(request: HttpRequest, allowed: list[str]) -> JsonResponse:
    resp = JsonResponse({"error": f"Method {request.method} not allowed"}, status=405)
    resp["Allow"] = ", ".join(allowed)
    return resp
