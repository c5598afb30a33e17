"""
Smoke tests — verify that Django boots, URL routing resolves, and
the core domain modules are importable.

These tests require a DB (they use ``@pytest.mark.django_db`` where
needed) but do NOT require real data — they just prove the plumbing
works.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.urls import resolve, reverse


# ════════════════════════════════════════════════════════════════════
#  URL Routing Smoke Tests
# ════════════════════════════════════════════════════════════════════

class TestURLRouting:
    """Ensure all top-level app URL namespaces resolve without 404."""

    EXPECTED_URLS = [
        # (url_name, kwargs, expected_path)
        ("complaint-list",             {},                   "/api/complaints/"),
        ("complaint-detail",           {"pk": 1},            "/api/complaints/1/"),
        ("complaint-assign",           {"pk": 1},            "/api/complaints/1/assign/"),
        ("complaint-change-status",    {"pk": 1},            "/api/complaints/1/status/"),
        ("complaint-comments",         {"pk": 1},            "/api/complaints/1/comments/"),
        ("escalation-complaint",       {"complaint_id": 1},  "/api/escalations/complaints/1/"),
        ("escalation-unresolved",      {},                   "/api/escalations/unresolved/"),
        ("escalation-resolve",         {"pk": 1},            "/api/escalations/1/resolve/"),
        ("core:notification-list",     {},                   "/api/core/notifications/"),
        ("core:notification-unread-count", {},               "/api/core/notifications/unread-count/"),
        ("accounts:login",             {},                   "/api/accounts/token/"),
        ("accounts:me",                {},                   "/api/accounts/me/"),
    ]

    @pytest.mark.parametrize("url_name,kwargs,expected_path", EXPECTED_URLS)
    def test_url_reverses(self, url_name: str, kwargs: dict, expected_path: str):
        """Named URL reverses to the expected path."""
        url = reverse(url_name, kwargs=kwargs or None)
        assert url == expected_path, f"{url_name} resolved to {url}, expected {expected_path}"

    @pytest.mark.parametrize("url_name,kwargs,expected_path", EXPECTED_URLS)
    def test_path_resolves_to_view(self, url_name: str, kwargs: dict, expected_path: str):
        """Path resolves to a view function (not a 404)."""
        match = resolve(expected_path)
        assert match.func is not None


@pytest.mark.django_db
class TestSchema:
    def test_openapi_schema_renders(self, api_client, auth_header):
        header = auth_header(username="schema_reader")
        api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
        response = api_client.get(reverse("schema"))
        assert response.status_code == 200


# ════════════════════════════════════════════════════════════════════
#  Core Domain Module Import Tests
# ════════════════════════════════════════════════════════════════════

class TestCoreDomainImports:
    """Verify that shared domain utility modules are importable."""

    def test_import_exceptions(self):
        from core.domain.exceptions import (
            Conflict,
            DeliveryFailure,
            DomainError,
            InvalidInput,
            InvalidTransition,
            NotFound,
            PermissionDenied,
        )
        assert issubclass(InvalidTransition, Conflict)
        assert issubclass(Conflict, DomainError)
        assert issubclass(InvalidInput, DomainError)
        assert issubclass(PermissionDenied, DomainError)
        assert issubclass(NotFound, DomainError)
        assert not issubclass(DeliveryFailure, DomainError)

    def test_import_notifications(self):
        from core.domain.notifications import NotificationService, render_event
        assert hasattr(NotificationService, "create")
        assert callable(render_event)

    def test_import_transactions(self):
        from core.domain.transactions import lock_for_update, run_in_atomic
        assert callable(run_in_atomic)
        assert callable(lock_for_update)

    def test_import_escalation_engine(self):
        from escalations.scheduler import SWEEP_JOB_ID, EscalationScheduler
        from escalations.services import EscalationService
        assert SWEEP_JOB_ID == "complaint-escalation-sweep"
        assert callable(EscalationService.sweep)
        assert callable(EscalationScheduler)


# ════════════════════════════════════════════════════════════════════
#  Exception Behaviour Tests
# ════════════════════════════════════════════════════════════════════

class TestDomainExceptions:
    """Unit tests for domain exception classes."""

    def test_domain_error_message(self):
        from core.domain.exceptions import DomainError
        err = DomainError("test message")
        assert str(err) == "test message"

    def test_invalid_transition_structured(self):
        from core.domain.exceptions import InvalidTransition
        err = InvalidTransition(
            current="RESOLVED",
            target="ESCALATED",
            reason="Resolved complaints cannot be escalated",
        )
        assert "RESOLVED" in str(err)
        assert "ESCALATED" in str(err)
        assert err.current == "RESOLVED"
        assert err.target == "ESCALATED"

    def test_delivery_failure_carries_cause(self):
        from core.domain.exceptions import DeliveryFailure
        cause = OSError("connection refused")
        err = DeliveryFailure("email", "a@b.c", cause)
        assert err.cause is cause
        assert str(err) == "email delivery to a@b.c failed: connection refused"


# ════════════════════════════════════════════════════════════════════
#  Access Helper Unit Tests
# ════════════════════════════════════════════════════════════════════

class TestAccessHelpers:
    """Unit tests for core.domain.access helpers."""

    def test_apply_permission_scope_no_match_default_none(self):
        from core.domain.access import apply_permission_scope

        user = MagicMock()
        user.has_perm.return_value = False
        qs = MagicMock()

        apply_permission_scope(qs, user, scope_rules=[("x.y", lambda q, u: q)])
        qs.none.assert_called_once()

    def test_apply_permission_scope_first_match_wins(self):
        from core.domain.access import apply_permission_scope

        user = MagicMock()
        user.has_perm.side_effect = lambda p: p in ("a.broad", "a.narrow")
        qs = MagicMock()
        broad, narrow = MagicMock(return_value="broad"), MagicMock(return_value="narrow")

        result = apply_permission_scope(
            qs, user, scope_rules=[("a.broad", broad), ("a.narrow", narrow)],
        )
        assert result == "broad"
        narrow.assert_not_called()

    def test_require_permission_raises(self):
        from core.domain.access import require_permission
        from core.domain.exceptions import PermissionDenied

        user = MagicMock()
        user.has_perm.return_value = False

        with pytest.raises(PermissionDenied, match="Missing required permission"):
            require_permission(user, "escalations.can_resolve_escalation")
