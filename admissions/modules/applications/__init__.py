"""Application drafts and submissions."""

from .exceptions import ApplicationNotFoundError
from .forms import ApplicationDraft, ApplicationForm
from .models import ApplicationRecord, ApplicationStatus, SubmissionResult
from .service import ApplicationSubmissionService

__all__ = [
    "ApplicationDraft",
    "ApplicationForm",
    "ApplicationNotFoundError",
    "ApplicationRecord",
    "ApplicationStatus",
    "ApplicationSubmissionService",
    "SubmissionResult",
]
