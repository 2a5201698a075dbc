from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.response import Response

from definitions.models import FormDefinition
from definitions.serializers import (
    FormDefinitionListSerializer,
    FormDefinitionSerializer,
    InlineRenderSerializer,
    RenderRequestSerializer,
)
from definitions.services import render_definition, render_form
from formgen.locales import available_locales


def _wants_html(request):
    # ``format`` is taken by DRF's content negotiation
    return request.query_params.get("output") == "html"


class FormDefinitionViewSet(viewsets.ModelViewSet):
    """CRUD for stored form definitions. Public read, admin write."""

    queryset = FormDefinition.objects.select_related("base").all()
    lookup_field = "name"
    search_fields = ["name", "description"]
    ordering_fields = ["name", "created_at", "updated_at"]

    def get_serializer_class(self):
        if self.action == "list":
            return FormDefinitionListSerializer
        if self.action == "render_form":
            return RenderRequestSerializer
        return FormDefinitionSerializer

    def get_permissions(self):
        if self.action in ("create", "update", "partial_update", "destroy"):
            return [permissions.IsAdminUser()]
        return [permissions.AllowAny()]

    @action(detail=True, methods=["post"], url_path="render")
    def render_form(self, request, name=None):
        """Render the definition against the posted form-state snapshot."""
        definition = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = render_definition(definition, serializer.validated_data, as_html=_wants_html(request))
        return Response(payload)


@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def render_inline(request):
    """Render a schema posted in the request body."""
    serializer = InlineRenderSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    data = serializer.validated_data
    payload = render_form(data["name"], data["schema"], data, as_html=_wants_html(request))
    return Response(payload)


@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def locales_view(request):
    """List the built-in locale tables."""
    return Response({"locales": available_locales()})
