from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_GET

from apps.accounts.auth import require_admin
from apps.common.api import json_view
from . import services
from .charts import render_line_chart


@require_GET
@json_view
@require_admin
def daily_revenue(request: HttpRequest) -> JsonResponse:
    start, end = services.parse_range(request.GET.get("start"), request.GET.get("end"))
    return JsonResponse(services.daily_revenue(start, end))


@require_GET
@json_view
@require_admin
def daily_revenue_chart(request: HttpRequest) -> HttpResponse:
    start, end = services.parse_range(request.GET.get("start"), request.GET.get("end"))
    report = services.daily_revenue(start, end)
    svg = render_line_chart(report["data"])
    resp = HttpResponse(svg, content_type="image/svg+xml")
    resp["X-Revenue-Source"] = report["source"]
    return resp


@require_GET
@json_view
@require_admin
def lifetime_revenue(request: HttpRequest) -> JsonResponse:
    return JsonResponse(services.lifetime_revenue())
