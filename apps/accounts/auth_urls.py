from django.urls import path

from . import auth_views as v

app_name = "accounts"

urlpatterns = [
    path("auth/signup", v.signup, name="signup"),
    path("auth/login", v.login, name="login"),
    path("auth/logout", v.logout, name="logout"),
    path("auth/me", v.me, name="me"),
    path("admin/login", v.admin_login, name="admin_login"),
]
