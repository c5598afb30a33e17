"""
Who initiated an escalation.

``Actor`` is either a ``HumanActor`` wrapping an authenticated user, or
the ``SYSTEM`` singleton used by the automatic sweep.  Everything the
engine needs from the initiator (names for the comment and the
notifications, a contact address, the user to store on the record) is
read through this small interface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from core.constants import SYSTEM_ACTOR_NAME, SYSTEM_COMMENT_NAME, escalation_setting

if TYPE_CHECKING:
    from accounts.models import User


@dataclass(frozen=True)
class HumanActor:
    user: User

    @property
    def display_name(self) -> str:
        return self.user.display_name

    @property
    def comment_name(self) -> str:
        return self.user.display_name

    @property
    def contact_email(self) -> str:
        return self.user.email

    @property
    def is_system(self) -> bool:
        return False

    def __str__(self):
        return self.user.username


@dataclass(frozen=True)
class SystemActor:
    @property
    def user(self) -> None:
        return None

    @property
    def display_name(self) -> str:
        return SYSTEM_ACTOR_NAME

    @property
    def comment_name(self) -> str:
        return SYSTEM_COMMENT_NAME

    @property
    def contact_email(self) -> str:
        return escalation_setting("SYSTEM_EMAIL")

    @property
    def is_system(self) -> bool:
        return True

    def __str__(self):
        return "system"


Actor = Union[HumanActor, SystemActor]

SYSTEM = SystemActor()
