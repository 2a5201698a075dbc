from django.urls import include, path
from rest_framework.routers import DefaultRouter

from definitions.views import FormDefinitionViewSet, locales_view, render_inline

router = DefaultRouter()
router.register("definitions", FormDefinitionViewSet, basename="definition")

urlpatterns = [
    path("render/", render_inline, name="render-inline"),
    path("locales/", locales_view, name="locales"),
    path("", include(router.urls)),
]
