"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  ``core.domain.exception_handler`` maps them to HTTP
responses at the view boundary.

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────┬──────┐
│ Domain Exception    │ DRF / HTTP equivalent        │ Code │
├─────────────────────┼──────────────────────────────┼──────┤
│ DomainError         │ ValidationError / 400        │ 400  │
│ InvalidInput        │ ValidationError / 400        │ 400  │
│ PermissionDenied    │ PermissionDenied / 403       │ 403  │
│ NotFound            │ NotFound / 404               │ 404  │
│ Conflict            │ APIException / 409           │ 409  │
│ InvalidTransition   │ APIException / 409           │ 409  │
└─────────────────────┴──────────────────────────────┴──────┘

``DeliveryFailure`` never reaches a view: it is raised by outbound
senders (email) and always recovered inside the notification fan-out.

Recommended usage inside a service::

    from core.domain.exceptions import InvalidTransition

    if complaint.status.code == StatusCode.RESOLVED:
        raise InvalidTransition(current="RESOLVED", target="ESCALATED")
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Catch this at the view boundary and convert to a 400 Bad Request.
    """

    def __init__(self, message: str = "A business rule was violated.") -> None:
        self.message = message
        super().__init__(self.message)


class InvalidInput(DomainError):
    """
    A caller-supplied value is missing or malformed (e.g. a blank
    escalation reason).

    Maps to HTTP 400.
    """

    def __init__(self, message: str = "The supplied input is invalid.") -> None:
        super().__init__(message)


class PermissionDenied(DomainError):
    """
    The authenticated user does not have the required role or permission
    for this operation.

    Maps to HTTP 403.
    """

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


class NotFound(DomainError):
    """
    The requested resource does not exist (or is not visible to the
    requesting user given their role scope).

    Maps to HTTP 404.
    """

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Maps to HTTP 409.
    """

    def __init__(self, message: str = "The operation conflicts with the current state.") -> None:
        super().__init__(message)


class InvalidTransition(Conflict):
    """
    A state-machine transition that is not allowed from the current status.

    Example::

        raise InvalidTransition(
            current="RESOLVED",
            target="ESCALATED",
            reason="Resolved complaints cannot be escalated.",
        )
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        current: str | None = None,
        target: str | None = None,
        reason: str | None = None,
    ) -> None:
        if message is None:
            parts = ["Invalid state transition"]
            if current and target:
                parts.append(f"from '{current}' to '{target}'")
            if reason:
                parts.append(f"({reason})")
            message = " ".join(parts) + "."
        super().__init__(message)
        self.current = current
        self.target = target
        self.reason = reason


class DeliveryFailure(Exception):
    """
    An outbound delivery (email, in-app record) could not be completed.

    Not a ``DomainError``: delivery is best-effort and the failure is
    logged and swallowed by the caller, never shown to an API client.
    """

    def __init__(self, channel: str, recipient: str, cause: Exception | None = None) -> None:
        self.channel = channel
        self.recipient = recipient
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{channel} delivery to {recipient} failed{detail}")
