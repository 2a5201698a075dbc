"""Root URL configuration for the formsite project."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("api/forms/admin/", admin.site.urls),
    path("api/forms/", include("definitions.urls")),
]
