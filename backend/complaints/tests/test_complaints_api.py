"""
HTTP tests for ``/api/complaints/``.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import Role
from complaints.models import Comment, Complaint, StatusCode

User = get_user_model()


def _make_role(name: str, hierarchy_level: int) -> Role:
    role, _ = Role.objects.get_or_create(
        name=name,
        defaults={"description": f"Test role: {name}", "hierarchy_level": hierarchy_level},
    )
    return role


def _grant(role: Role, codename: str, app_label: str) -> None:
    role.permissions.add(Permission.objects.get(codename=codename, content_type__app_label=app_label))


class TestComplaintEndpoints(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.admin_role = _make_role("Admin", 100)
        cls.officer_role = _make_role("Officer", 50)
        for codename in ("can_assign_officer", "can_change_complaint_status", "can_scope_all_complaints"):
            _grant(cls.admin_role, codename, "complaints")

        cls.admin = User.objects.create_user(
            username="admin1", email="admin1@test.local", password="pw-Admin-1", role=cls.admin_role,
        )
        cls.officer = User.objects.create_user(
            username="officer1", email="officer1@test.local", password="pw-Officer-1", role=cls.officer_role,
        )
        cls.citizen = User.objects.create_user(
            username="citizen1", email="citizen1@test.local", password="pw-Citizen-1",
        )

    def setUp(self):
        self.client = APIClient()

    def _submit(self, **overrides):
        payload = {"title": "Water leak", "description": "Pipe burst near the park"}
        payload.update(overrides)
        self.client.force_authenticate(user=self.citizen)
        return self.client.post(reverse("complaint-list"), payload, format="json")

    def test_submit_returns_201_with_new_status(self):
        response = self._submit(priority="MEDIUM")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"]["code"], StatusCode.NEW)
        self.assertEqual(response.data["priority"], "MEDIUM")
        self.assertEqual(response.data["user"]["username"], "citizen1")

    def test_anonymous_complaint_hides_owner(self):
        response = self._submit(is_anonymous=True)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data["user"])

    def test_missing_description_is_400(self):
        self.client.force_authenticate(user=self.citizen)
        response = self.client.post(reverse("complaint-list"), {"title": "t"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_and_retrieve_are_scoped(self):
        complaint_id = self._submit().data["id"]

        response = self.client.get(reverse("complaint-detail", kwargs={"pk": complaint_id}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.force_authenticate(user=self.officer)
        response = self.client.get(reverse("complaint-list"))
        self.assertEqual(response.data, [])
        response = self.client.get(reverse("complaint-detail", kwargs={"pk": complaint_id}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_assigns_officer(self):
        complaint_id = self._submit().data["id"]
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            reverse("complaint-assign", kwargs={"pk": complaint_id}),
            {"officer_id": self.officer.pk},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["assigned_officer"]["id"], self.officer.pk)
        self.assertEqual(response.data["status"]["code"], StatusCode.ASSIGNED)

    def test_citizen_cannot_change_status(self):
        complaint_id = self._submit().data["id"]
        response = self.client.post(
            reverse("complaint-change-status", kwargs={"pk": complaint_id}),
            {"status": StatusCode.RESOLVED},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Complaint.objects.get(pk=complaint_id).status_code, StatusCode.NEW)

    def test_admin_changes_status(self):
        complaint_id = self._submit().data["id"]
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            reverse("complaint-change-status", kwargs={"pk": complaint_id}),
            {"status": StatusCode.RESOLVED},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"]["code"], StatusCode.RESOLVED)

    def test_comment_round_trip(self):
        complaint_id = self._submit().data["id"]
        url = reverse("complaint-comments", kwargs={"pk": complaint_id})

        response = self.client.post(url, {"message": "Any update?"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["author"]["username"], "citizen1")

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c["message"] for c in response.data], ["Any update?"])
        self.assertEqual(Comment.objects.filter(complaint_id=complaint_id).count(), 1)
