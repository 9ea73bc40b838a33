from django.urls import path

from . import views

app_name = "revenue"

urlpatterns = [
    path("reports/daily-revenue", views.daily_revenue, name="daily_revenue"),
    path("reports/daily-revenue.svg", views.daily_revenue_chart, name="daily_revenue_chart"),
    path("reports/lifetime-revenue", views.lifetime_revenue, name="lifetime_revenue"),
]
