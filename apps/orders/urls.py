from django.urls import path

from . import views

app_name = "orders"

urlpatterns = [
    path("orders", views.orders, name="list"),
    path("orders/<str:code>", views.order_detail, name="detail"),
]
