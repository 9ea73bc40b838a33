from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_POST

from apps.accounts.auth import is_admin_request, require_admin
from apps.common import errors
from apps.common.api import json_view, method_not_allowed, parse_json
from apps.common.errors import DependencyFailure
from apps.common.images import process_menu_image
from apps.common.validators import validate_upload
from . import services
from .models import MenuItem

logger = logging.getLogger(__name__)


@json_view
def foods(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        qs = MenuItem.objects.all()
        # only the admin dashboard sees unavailable dishes
        if not is_admin_request(request):
            qs = qs.filter(is_available=True)
        return JsonResponse([item.as_dict() for item in qs], safe=False)
    if request.method == "POST":
        return _create(request)
    return method_not_allowed(request, ["GET", "POST"])


@require_admin
def _create(request: HttpRequest) -> JsonResponse:
    item = services.create_item(parse_json(request))
    return JsonResponse(item.as_dict(), status=201)


@json_view
def food_detail(request: HttpRequest, item_id) -> JsonResponse:
    if request.method == "GET":
        return JsonResponse(services.get_item(item_id).as_dict())
    if request.method == "PUT":
        return _update(request, item_id)
    if request.method == "DELETE":
        return _delete(request, item_id)
    return method_not_allowed(request, ["GET", "PUT", "DELETE"])


@require_admin
def _update(request: HttpRequest, item_id) -> JsonResponse:
    data = parse_json(request)
    item = services.update_item(services.get_item(item_id), data)
    return JsonResponse(item.as_dict())


@require_admin
def _delete(request: HttpRequest, item_id) -> JsonResponse:
    deleted = services.delete_item(services.get_item(item_id))
    return JsonResponse({"message": "Food deleted successfully", "deleted": deleted})


@require_POST
@json_view
@require_admin
def upload_image(request: HttpRequest) -> JsonResponse:
    img = request.FILES.get("image") or request.FILES.get("file")
    if img is None:
        raise errors.ValidationError("No image provided")
    validate_upload(img)
    try:
        stored = process_menu_image(img)
    except DependencyFailure:
        return JsonResponse({"error": "Failed to upload image"}, status=502)
    return JsonResponse({"url": stored["url"], "path": stored["path"]}, status=201)
