from django.contrib import admin
from django.http import HttpResponse
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("apps.accounts.auth_urls")),
    path("api/", include("apps.menu.urls")),
    path("api/", include("apps.orders.urls")),
    path("api/", include("apps.revenue.urls")),
    # Healthcheck endpoint
    path("healthz", lambda _request: HttpResponse("ok")),
]
