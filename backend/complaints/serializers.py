"""
Complaints app serializers.

Serializers handle field definitions, read/write constraints and
field-level validation only.  Workflow logic lives in ``services.py``.

Structure
---------
1. Read serializers (status, complaint, comment)
2. Write serializers (submit, assign, status change, comment)
"""

from __future__ import annotations

from rest_framework import serializers

from accounts.serializers import UserSummarySerializer

from .models import Comment, Complaint, ComplaintStatus, Priority, StatusCode


# ═══════════════════════════════════════════════════════════════════
#  1. Read Serializers
# ═══════════════════════════════════════════════════════════════════


class ComplaintStatusSerializer(serializers.ModelSerializer):
    class Meta:
        model = ComplaintStatus
        fields = ["code", "display"]
        read_only_fields = fields


class ComplaintSerializer(serializers.ModelSerializer):
    """Full complaint representation; the owner is hidden for anonymous filings."""

    status = ComplaintStatusSerializer(read_only=True)
    user = serializers.SerializerMethodField()
    assigned_officer = UserSummarySerializer(read_only=True)

    class Meta:
        model = Complaint
        fields = [
            "id",
            "title",
            "description",
            "category",
            "priority",
            "is_anonymous",
            "user",
            "assigned_officer",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_user(self, obj: Complaint):
        if obj.owner is None:
            return None
        return UserSummarySerializer(obj.owner).data


class CommentSerializer(serializers.ModelSerializer):
    """``author`` is null for system-generated comments."""

    author = UserSummarySerializer(read_only=True)

    class Meta:
        model = Comment
        fields = ["id", "complaint", "author", "message", "is_private", "created_at"]
        read_only_fields = fields


# ═══════════════════════════════════════════════════════════════════
#  2. Write Serializers
# ═══════════════════════════════════════════════════════════════════


class ComplaintSubmitSerializer(serializers.Serializer):
    """Request body for ``POST /api/complaints/``."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    category = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    priority = serializers.ChoiceField(choices=Priority.choices, required=False, default=Priority.LOW)
    is_anonymous = serializers.BooleanField(required=False, default=False)


class AssignOfficerSerializer(serializers.Serializer):
    """Request body for ``POST /api/complaints/{id}/assign/``."""

    officer_id = serializers.IntegerField(min_value=1)


class StatusChangeSerializer(serializers.Serializer):
    """Request body for ``POST /api/complaints/{id}/status/``."""

    status = serializers.ChoiceField(choices=StatusCode.choices)


class CommentCreateSerializer(serializers.Serializer):
    """Request body for ``POST /api/complaints/{id}/comments/``."""

    message = serializers.CharField()
    is_private = serializers.BooleanField(required=False, default=False)
