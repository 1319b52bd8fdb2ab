from django.urls import path
from . import views

app_name = "cart"

urlpatterns = [
    path("", views.cart_summary, name="summary"),
    path("add/", views.cart_add, name="add"),
    path("update/", views.cart_update, name="update"),
    path("remove/", views.cart_remove, name="remove"),
    path("clear/", views.cart_clear, name="clear"),
    path("copy/", views.cart_copy, name="copy"),
]
