from django.apps import AppConfig


class MenuConfig(AppConfig):
    name = "apps.menu"
    verbose_name = "Menu"
