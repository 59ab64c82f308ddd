"""Identity value supplied by the external identity provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class Identity:
    id: str
    email: Optional[str] = None
