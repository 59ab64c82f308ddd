"""Domain models for application records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ApplicationStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(slots=True)
class ApplicationRecord:
    id: str
    owner_id: str
    status: ApplicationStatus
    personal_info: dict[str, Any] = field(default_factory=dict)
    academic_background: dict[str, Any] = field(default_factory=dict)
    program_selection: dict[str, Any] = field(default_factory=dict)
    accommodation: dict[str, Any] = field(default_factory=dict)
    referee: dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_draft(self) -> bool:
        return self.status is ApplicationStatus.DRAFT


@dataclass(slots=True)
class SubmissionResult:
    success: bool
    application_id: Optional[str] = None
    message: str = "Application submitted successfully"
