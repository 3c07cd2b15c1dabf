# schoolhub/core/context.py
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

STAFF_ROLES = frozenset({"admin", "teacher"})


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Who is asking and for which school.

    Built once per request from the bearer token and handed to every
    data-access call that needs tenant or identity scoping.
    """

    user_id: UUID
    school_id: UUID
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES
