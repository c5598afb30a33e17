"""
Complaints app ViewSets.

Views are intentionally thin: parse input with a serializer, delegate to
``complaints.services``, serialize the result.  Permission checks live
in the service layer; the view only requires authentication.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from .models import Complaint
from .serializers import (
    AssignOfficerSerializer,
    CommentCreateSerializer,
    CommentSerializer,
    ComplaintSerializer,
    ComplaintSubmitSerializer,
    StatusChangeSerializer,
)
from .services import CommentService, ComplaintLifecycleService, ComplaintQueryService


class ComplaintViewSet(viewsets.ViewSet):
    """
    Complaint submission, lookup and lifecycle actions.

    GET  /api/complaints/                 → complaints visible to the caller
    POST /api/complaints/                 → submit a complaint
    GET  /api/complaints/{id}/            → retrieve
    POST /api/complaints/{id}/assign/     → assign an officer
    POST /api/complaints/{id}/status/     → change status
    GET  /api/complaints/{id}/comments/   → list comments
    POST /api/complaints/{id}/comments/   → add a comment
    """

    permission_classes = [IsAuthenticated]
    queryset = Complaint.objects.none()

    @extend_schema(responses={200: ComplaintSerializer(many=True)}, tags=["Complaints"])
    def list(self, request: Request) -> Response:
        complaints = ComplaintQueryService.get_filtered_queryset(request.user)
        return Response(ComplaintSerializer(complaints, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=ComplaintSubmitSerializer,
        responses={201: ComplaintSerializer, 400: OpenApiResponse(description="Validation error.")},
        tags=["Complaints"],
    )
    def create(self, request: Request) -> Response:
        serializer = ComplaintSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        complaint = ComplaintLifecycleService.submit_complaint(serializer.validated_data, request.user)
        return Response(ComplaintSerializer(complaint).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ComplaintSerializer, 404: OpenApiResponse(description="Not found.")}, tags=["Complaints"])
    def retrieve(self, request: Request, pk: int = None) -> Response:
        complaint = ComplaintQueryService.get_visible_complaint(pk, request.user)
        return Response(ComplaintSerializer(complaint).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="assign")
    @extend_schema(
        request=AssignOfficerSerializer,
        responses={200: ComplaintSerializer, 403: OpenApiResponse(description="Permission denied.")},
        tags=["Complaints – Workflow"],
    )
    def assign(self, request: Request, pk: int = None) -> Response:
        serializer = AssignOfficerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        complaint = ComplaintLifecycleService.assign_officer(
            complaint_id=pk,
            officer_id=serializer.validated_data["officer_id"],
            requesting_user=request.user,
        )
        return Response(ComplaintSerializer(complaint).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="status")
    @extend_schema(
        request=StatusChangeSerializer,
        responses={200: ComplaintSerializer, 403: OpenApiResponse(description="Permission denied.")},
        tags=["Complaints – Workflow"],
    )
    def change_status(self, request: Request, pk: int = None) -> Response:
        serializer = StatusChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        complaint = ComplaintLifecycleService.update_status(
            complaint_id=pk,
            status_code=serializer.validated_data["status"],
            requesting_user=request.user,
        )
        return Response(ComplaintSerializer(complaint).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get", "post"], url_path="comments")
    @extend_schema(
        request=CommentCreateSerializer,
        responses={200: CommentSerializer(many=True), 201: CommentSerializer},
        tags=["Complaints – Comments"],
    )
    def comments(self, request: Request, pk: int = None) -> Response:
        if request.method == "GET":
            comments = CommentService.list_comments(pk, request.user)
            return Response(CommentSerializer(comments, many=True).data, status=status.HTTP_200_OK)

        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = CommentService.add_comment(
            complaint_id=pk,
            message=serializer.validated_data["message"],
            author=request.user,
            is_private=serializer.validated_data["is_private"],
        )
        return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)
