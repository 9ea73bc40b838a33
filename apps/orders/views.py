from __future__ import annotations

from django.http import HttpRequest, JsonResponse

from apps.accounts.auth import is_admin_request, member_from_request, require_admin
from apps.common import errors
from apps.common.api import json_view, method_not_allowed, parse_json
from . import services


@json_view
def orders(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        email = (request.GET.get("email") or "").strip()
        # the full list is admin-only; customers look up their own by e-mail
        if not email and not is_admin_request(request):
            raise errors.UnauthorizedError()
        return JsonResponse([o.as_dict() for o in services.list_orders(email or None)], safe=False)
    if request.method == "POST":
        order = services.create_order(parse_json(request), user=member_from_request(request))
        return JsonResponse(
            {
                "message": "Order created successfully",
                "order": order.as_dict(),
                "tracking_url": order.tracking_url,
            },
            status=201,
        )
    return method_not_allowed(request, ["GET", "POST"])


@json_view
def order_detail(request: HttpRequest, code: str) -> JsonResponse:
    if request.method == "GET":
        return JsonResponse(services.get_order(code).as_tracking_dict())
    if request.method == "PUT":
        return _update(request, code)
    return method_not_allowed(request, ["GET", "PUT"])


@require_admin
def _update(request: HttpRequest, code: str) -> JsonResponse:
    data = parse_json(request)
    status = data.get("status")
    workflow_status = data.get("workflow_status")
    if status is None and workflow_status is None:
        raise errors.ValidationError("status is required")
    order = services.update_order_status(code, status, workflow_status=workflow_status)
    return JsonResponse(order.as_dict())
