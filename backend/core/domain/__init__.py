"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions        Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler DRF handler translating domain exceptions to responses.
notifications     Synchronous notification creation helper.
transactions      Helpers for ``transaction.atomic`` + ``select_for_update``.
access            Permission-scoped queryset selectors and guards.

Usage from any app::

    from core.domain.exceptions import DomainError, InvalidInput, NotFound
    from core.domain.notifications import NotificationService
    from core.domain.transactions import lock_for_update
    from core.domain.access import require_permission
"""
