"""
HTTP tests for ``/api/escalations/``.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import Role
from complaints.models import Complaint, ComplaintStatus, StatusCode
from core.models import Notification
from escalations.actors import SYSTEM
from escalations.models import Escalation
from escalations.services import EscalationService

User = get_user_model()


def _make_role(name: str, hierarchy_level: int) -> Role:
    role, _ = Role.objects.get_or_create(
        name=name,
        defaults={"description": f"Test role: {name}", "hierarchy_level": hierarchy_level},
    )
    return role


def _grant(role: Role, codename: str, app_label: str) -> None:
    role.permissions.add(Permission.objects.get(codename=codename, content_type__app_label=app_label))


class TestEscalationEndpoints(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.admin_role = _make_role("Admin", 100)
        cls.officer_role = _make_role("Officer", 50)
        for codename in (
            "view_escalation",
            "can_escalate_complaint",
            "can_resolve_escalation",
            "can_view_unresolved_escalations",
        ):
            _grant(cls.admin_role, codename, "escalations")
        _grant(cls.officer_role, "view_escalation", "escalations")
        _grant(cls.officer_role, "can_escalate_complaint", "escalations")

        cls.admin = User.objects.create_user(
            username="admin1", email="admin1@test.local", password="pw-Admin-1", role=cls.admin_role,
        )
        cls.officer = User.objects.create_user(
            username="officer1", email="officer1@test.local", password="pw-Officer-1",
            role=cls.officer_role, first_name="Olive", last_name="Officer",
        )
        cls.citizen = User.objects.create_user(
            username="citizen1", email="citizen1@test.local", password="pw-Citizen-1",
        )
        cls.stranger = User.objects.create_user(
            username="citizen2", email="citizen2@test.local", password="pw-Citizen-2",
        )

    def setUp(self):
        self.client = APIClient()
        self.complaint = Complaint.objects.create(
            title="Street flooding",
            description="Drain blocked for a week",
            user=self.citizen,
            status=ComplaintStatus.objects.get(code=StatusCode.ASSIGNED),
            assigned_officer=self.officer,
        )
        self.url = reverse("escalation-complaint", kwargs={"complaint_id": self.complaint.pk})

    def test_requires_authentication(self):
        response = self.client.post(self.url, {"reason": "x"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_officer_escalates_complaint(self):
        self.client.force_authenticate(user=self.officer)
        response = self.client.post(self.url, {"reason": "Out of my depth"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["complaint"], self.complaint.pk)
        self.assertEqual(response.data["escalated_to_role"], "Admin")
        self.assertEqual(response.data["escalated_by"]["full_name"], "Olive Officer")
        self.assertFalse(response.data["resolved"])
        self.assertEqual(Notification.objects.count(), 2)

    def test_blank_reason_is_400_and_changes_nothing(self):
        self.client.force_authenticate(user=self.officer)
        response = self.client.post(self.url, {"reason": "   "}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Escalation reason is required.")
        self.assertFalse(Escalation.objects.exists())
        self.complaint.refresh_from_db()
        self.assertEqual(self.complaint.status.code, StatusCode.ASSIGNED)

    def test_resolved_complaint_is_409_and_changes_nothing(self):
        self.complaint.status = ComplaintStatus.objects.get(code=StatusCode.RESOLVED)
        self.complaint.save()
        self.client.force_authenticate(user=self.officer)

        response = self.client.post(self.url, {"reason": "Reopen please"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("Resolved complaints cannot be escalated", response.data["detail"])
        self.assertFalse(Escalation.objects.exists())
        self.assertFalse(Notification.objects.exists())
        self.complaint.refresh_from_db()
        self.assertEqual(self.complaint.status.code, StatusCode.RESOLVED)

    def test_citizen_cannot_escalate(self):
        self.client.force_authenticate(user=self.citizen)
        response = self.client.post(self.url, {"reason": "Please hurry"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_complaint_is_404(self):
        self.client.force_authenticate(user=self.officer)
        url = reverse("escalation-complaint", kwargs={"complaint_id": 999_999})
        response = self.client.post(url, {"reason": "x"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_history_is_visible_to_owner_and_staff_only(self):
        EscalationService.escalate_complaint(self.complaint.pk, "Stale", SYSTEM)

        self.client.force_authenticate(user=self.citizen)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertIsNone(response.data[0]["escalated_by"])

        self.client.force_authenticate(user=self.officer)
        self.assertEqual(len(self.client.get(self.url).data), 1)

        self.client.force_authenticate(user=self.stranger)
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_404_NOT_FOUND)

    def test_unresolved_listing_and_resolve(self):
        escalation = EscalationService.escalate_complaint(self.complaint.pk, "Stale", SYSTEM)
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(reverse("escalation-unresolved"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([e["id"] for e in response.data], [escalation.pk])

        resolve_url = reverse("escalation-resolve", kwargs={"pk": escalation.pk})
        for _ in range(2):
            response = self.client.post(resolve_url)
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertTrue(response.data["resolved"])

        self.assertEqual(self.client.get(reverse("escalation-unresolved")).data, [])

    def test_officer_cannot_resolve_or_list_unresolved(self):
        escalation = EscalationService.escalate_complaint(self.complaint.pk, "Stale", SYSTEM)
        self.client.force_authenticate(user=self.officer)

        response = self.client.post(reverse("escalation-resolve", kwargs={"pk": escalation.pk}))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.get(reverse("escalation-unresolved"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_resolve_unknown_escalation_is_404(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(reverse("escalation-resolve", kwargs={"pk": 999_999}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
