from django.urls import path

from . import views

app_name = "menu"

urlpatterns = [
    path("foods", views.foods, name="foods"),
    path("foods/<uuid:item_id>", views.food_detail, name="food_detail"),
    path("uploads/image", views.upload_image, name="upload_image"),
]
