"""
core.domain.transactions — Helpers for safe state transitions.

Wraps ``transaction.atomic`` and ``select_for_update`` into reusable
patterns so that every app's service layer follows the same
concurrency-safe approach.

* State-transition reads always lock the row first
  (``select_for_update``) so that concurrent writers of the same row
  serialize at the database.
* ``run_in_atomic`` doubles as a savepoint boundary: when called inside
  an outer transaction, a failure inside ``fn`` rolls back only the
  savepoint and leaves the outer transaction usable.

Usage::

    from core.domain.transactions import lock_for_update, run_in_atomic

    with transaction.atomic():
        complaint = lock_for_update(Complaint, complaint_id)
        ...

    run_in_atomic(NotificationService.create, actor=None, ...)
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from django.db import models, transaction

from core.domain.exceptions import NotFound

T = TypeVar("T")
M = TypeVar("M", bound=models.Model)


def run_in_atomic(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Execute ``fn(*args, **kwargs)`` inside ``transaction.atomic()``.

    Args:
        fn:       Callable to run.
        *args:    Positional arguments forwarded to ``fn``.
        **kwargs: Keyword arguments forwarded to ``fn``.

    Returns:
        Whatever ``fn`` returns.

    Raises:
        Any exception raised by ``fn`` — the transaction (or savepoint)
        is rolled back.
    """
    with transaction.atomic():
        return fn(*args, **kwargs)


def lock_for_update(
    model_class: type[M],
    pk: Any,
    *,
    select_related: tuple[str, ...] = (),
) -> M:
    """
    Acquire a row-level lock on the given model instance.

    Must be called inside an ``atomic()`` block.  On backends without
    row locks (SQLite) the call degrades to a plain read.

    Args:
        model_class:    The Django model class.
        pk:             Primary key value.
        select_related: Optional relations to join in the same query.
                        Non-nullable FKs only: PostgreSQL refuses
                        ``FOR UPDATE`` on the nullable side of an
                        outer join.

    Returns:
        The locked model instance.

    Raises:
        NotFound: If no row with that PK exists.
    """
    qs = model_class.objects.select_for_update()
    if select_related:
        qs = qs.select_related(*select_related)
    try:
        return qs.get(pk=pk)
    except (model_class.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"{model_class.__name__} with id {pk} not found.")
