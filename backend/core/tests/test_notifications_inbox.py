"""
Tests for the in-app notification store.

Covers ``core.domain.notifications`` (templated creation) and the
per-user inbox in ``core.services.NotificationService`` together with
its HTTP surface under ``/api/core/notifications/``.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.contenttypes.models import ContentType
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from complaints.models import Complaint, ComplaintStatus, StatusCode
from core.domain.exceptions import NotFound
from core.domain.notifications import NotificationService as NotificationFactory
from core.domain.notifications import render_event
from core.models import Notification
from core.services import NotificationService

User = get_user_model()


class TestRenderEvent(TestCase):
    def test_escalation_owner_template(self):
        title, message = render_event(
            "complaint_escalated",
            {"complaint_title": "Pothole", "escalated_by": "Jo Doe", "reason": "Urgent"},
        )
        self.assertEqual(title, "Complaint Escalated")
        self.assertEqual(
            message,
            "Your complaint 'Pothole' has been escalated by Jo Doe. Reason: Urgent",
        )

    def test_escalation_admin_template(self):
        title, message = render_event(
            "escalation_needs_review",
            {"complaint_id": 42, "escalated_by": "System (Auto-escalation)"},
        )
        self.assertEqual(title, "New Escalated Complaint")
        self.assertEqual(
            message,
            "Complaint #42 escalated by System (Auto-escalation) requires your attention.",
        )

    def test_unknown_event_falls_back_to_title_cased_name(self):
        title, message = render_event("something_happened")
        self.assertEqual(title, "Something Happened")
        self.assertEqual(message, "Event: something_happened")

    def test_missing_payload_key_leaves_template_uninterpolated(self):
        title, message = render_event("complaint_escalated", {"reason": "x"})
        self.assertEqual(title, "Complaint Escalated")
        self.assertIn("{complaint_title}", message)


class TestNotificationCreation(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.alice = User.objects.create_user(username="alice", email="alice@test.local", password="pw-Alice-1")
        cls.bob = User.objects.create_user(username="bob", email="bob@test.local", password="pw-Bob-1")
        cls.complaint = Complaint.objects.create(
            title="Noise",
            description="Loud music every night",
            user=cls.alice,
            status=ComplaintStatus.objects.get(code=StatusCode.NEW),
        )

    def test_creates_one_unread_record_per_recipient(self):
        created = NotificationFactory.create(
            actor=None,
            recipients=[self.alice, self.bob],
            event_type="escalation_needs_review",
            payload={"complaint_id": self.complaint.pk, "escalated_by": "System"},
            related_object=self.complaint,
        )
        self.assertEqual(len(created), 2)
        for notification in created:
            self.assertFalse(notification.is_read)
            self.assertEqual(notification.object_id, self.complaint.pk)
            self.assertEqual(
                notification.content_type,
                ContentType.objects.get_for_model(Complaint),
            )
            self.assertEqual(notification.content_object, self.complaint)

    def test_single_recipient_is_accepted(self):
        created = NotificationFactory.create(
            actor=self.bob,
            recipients=self.alice,
            event_type="complaint_status_changed",
            payload={"complaint_title": "Noise", "status_display": "Resolved"},
        )
        self.assertEqual(len(created), 1)
        self.assertEqual(created[0].recipient, self.alice)
        self.assertEqual(created[0].message, "Your complaint 'Noise' is now Resolved.")
        self.assertIsNone(created[0].object_id)

    def test_empty_recipient_list_creates_nothing(self):
        created = NotificationFactory.create(
            actor=None, recipients=[], event_type="complaint_escalated",
        )
        self.assertEqual(created, [])
        self.assertEqual(Notification.objects.count(), 0)


class TestNotificationInboxService(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.alice = User.objects.create_user(username="alice", email="alice@test.local", password="pw-Alice-1")
        cls.bob = User.objects.create_user(username="bob", email="bob@test.local", password="pw-Bob-1")

    def setUp(self):
        self.first = Notification.objects.create(recipient=self.alice, title="One", message="m1")
        self.second = Notification.objects.create(recipient=self.alice, title="Two", message="m2")
        self.foreign = Notification.objects.create(recipient=self.bob, title="Bob's", message="m3")
        self.inbox = NotificationService(user=self.alice)

    def test_lists_only_own_notifications_newest_first(self):
        ids = list(self.inbox.list_notifications().values_list("id", flat=True))
        self.assertEqual(ids, [self.second.pk, self.first.pk])

    def test_mark_as_read_updates_unread_views(self):
        self.inbox.mark_as_read(self.first.pk)
        self.assertEqual(self.inbox.count_unread(), 1)
        self.assertEqual([n.pk for n in self.inbox.list_unread()], [self.second.pk])

    def test_mark_as_read_is_repeatable(self):
        self.inbox.mark_as_read(self.first.pk)
        notification = self.inbox.mark_as_read(self.first.pk)
        self.assertTrue(notification.is_read)

    def test_mark_as_read_of_foreign_notification_raises_not_found(self):
        with self.assertRaises(NotFound):
            self.inbox.mark_as_read(self.foreign.pk)
        self.foreign.refresh_from_db()
        self.assertFalse(self.foreign.is_read)

    def test_mark_all_as_read_returns_changed_count(self):
        self.assertEqual(self.inbox.mark_all_as_read(), 2)
        self.assertEqual(self.inbox.mark_all_as_read(), 0)
        self.assertEqual(NotificationService(user=self.bob).count_unread(), 1)

    def test_delete(self):
        self.inbox.delete(self.first.pk)
        self.assertFalse(Notification.objects.filter(pk=self.first.pk).exists())
        with self.assertRaises(NotFound):
            self.inbox.delete(self.first.pk)
        with self.assertRaises(NotFound):
            self.inbox.delete(self.foreign.pk)


class TestNotificationEndpoints(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.alice = User.objects.create_user(username="alice", email="alice@test.local", password="pw-Alice-1")
        cls.bob = User.objects.create_user(username="bob", email="bob@test.local", password="pw-Bob-1")

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=self.alice)
        self.mine = Notification.objects.create(recipient=self.alice, title="Mine", message="m")
        self.theirs = Notification.objects.create(recipient=self.bob, title="Theirs", message="m")

    def test_requires_authentication(self):
        response = APIClient().get(reverse("core:notification-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_and_unread_count(self):
        response = self.client.get(reverse("core:notification-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([n["id"] for n in response.data], [self.mine.pk])

        response = self.client.get(reverse("core:notification-unread-count"))
        self.assertEqual(response.data, {"count": 1})

    def test_mark_read_then_unread_list_is_empty(self):
        response = self.client.post(reverse("core:notification-mark-as-read", kwargs={"pk": self.mine.pk}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["is_read"])

        response = self.client.get(reverse("core:notification-unread"))
        self.assertEqual(response.data, [])

    def test_mark_read_of_other_users_notification_is_404(self):
        response = self.client.post(reverse("core:notification-mark-as-read", kwargs={"pk": self.theirs.pk}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_read_all(self):
        Notification.objects.create(recipient=self.alice, title="Another", message="m")
        response = self.client.post(reverse("core:notification-mark-all-as-read"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"updated": 2})

    def test_delete(self):
        response = self.client.delete(reverse("core:notification-detail", kwargs={"pk": self.mine.pk}))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        response = self.client.delete(reverse("core:notification-detail", kwargs={"pk": self.theirs.pk}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
