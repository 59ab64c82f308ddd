"""Gate that supplies the current identity and the "auth required" signal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from admissions.core.errors import AuthorizationError

from .models import Identity


@dataclass(slots=True, frozen=True)
class IdentityGate:
    identity: Optional[Identity] = None

    def require(self, message: str = "You must be signed in to continue") -> Identity:
        if self.identity is None:
            raise AuthorizationError(message, status=401)
        return self.identity


ANONYMOUS = IdentityGate()
