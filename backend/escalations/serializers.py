"""
Escalations app serializers.
"""

from __future__ import annotations

from rest_framework import serializers

from accounts.serializers import UserSummarySerializer

from .models import Escalation


class EscalationSerializer(serializers.ModelSerializer):
    """Read representation; ``escalated_by`` is null for automatic escalations."""

    escalated_by = UserSummarySerializer(read_only=True)
    escalated_to_role = serializers.CharField(source="escalated_to_role.name", read_only=True)
    complaint_title = serializers.CharField(source="complaint.title", read_only=True)

    class Meta:
        model = Escalation
        fields = [
            "id",
            "complaint",
            "complaint_title",
            "escalated_to_role",
            "escalated_by",
            "reason",
            "escalated_at",
            "resolved",
        ]
        read_only_fields = fields


class EscalateSerializer(serializers.Serializer):
    """Request body for ``POST /api/escalations/complaints/{id}/``."""

    # Blank reasons reach the service, which rejects them as InvalidInput.
    reason = serializers.CharField(allow_blank=True, trim_whitespace=False)
