"""
Escalations app ViewSet.

Thin wrappers around ``EscalationService``; permission checks happen in
the service.  The sweep has no HTTP trigger.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from .models import Escalation
from .serializers import EscalateSerializer, EscalationSerializer
from .services import EscalationService


class EscalationViewSet(viewsets.ViewSet):
    """
    GET  /api/escalations/complaints/{complaint_id}/  → escalation history
    POST /api/escalations/complaints/{complaint_id}/  → escalate manually
    GET  /api/escalations/unresolved/                 → open escalations
    POST /api/escalations/{id}/resolve/               → mark resolved
    """

    permission_classes = [IsAuthenticated]
    queryset = Escalation.objects.none()

    @action(
        detail=False,
        methods=["get", "post"],
        url_path=r"complaints/(?P<complaint_id>[0-9]+)",
        url_name="complaint",
    )
    @extend_schema(
        request=EscalateSerializer,
        responses={
            200: EscalationSerializer(many=True),
            201: EscalationSerializer,
            400: OpenApiResponse(description="Blank reason."),
            403: OpenApiResponse(description="Permission denied."),
            404: OpenApiResponse(description="Complaint not found."),
        },
        tags=["Escalations"],
    )
    def complaint(self, request: Request, complaint_id: str = None) -> Response:
        if request.method == "GET":
            escalations = EscalationService.list_escalations_for_user(int(complaint_id), request.user)
            return Response(EscalationSerializer(escalations, many=True).data, status=status.HTTP_200_OK)

        serializer = EscalateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        escalation = EscalationService.escalate_by_user(
            complaint_id=int(complaint_id),
            reason=serializer.validated_data["reason"],
            user=request.user,
        )
        return Response(EscalationSerializer(escalation).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"], url_path="unresolved")
    @extend_schema(responses={200: EscalationSerializer(many=True)}, tags=["Escalations"])
    def unresolved(self, request: Request) -> Response:
        escalations = EscalationService.list_unresolved_escalations(requesting_user=request.user)
        return Response(EscalationSerializer(escalations, many=True).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="resolve")
    @extend_schema(
        request=None,
        responses={200: EscalationSerializer, 404: OpenApiResponse(description="Not found.")},
        tags=["Escalations"],
    )
    def resolve(self, request: Request, pk: str = None) -> Response:
        escalation = EscalationService.resolve_escalation(pk, requesting_user=request.user)
        return Response(EscalationSerializer(escalation).data, status=status.HTTP_200_OK)
