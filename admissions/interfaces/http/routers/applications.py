"""Application drafts, submission and owner-scoped reads."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from admissions.core.errors import AdmissionsError
from admissions.interfaces.http.deps import get_application_service
from admissions.interfaces.http.errors import to_http_exception
from admissions.modules.applications import (
    ApplicationDraft,
    ApplicationForm,
    ApplicationRecord,
    ApplicationSubmissionService,
)
from admissions.schemas import (
    ApplicationListResponse,
    ApplicationResponse,
    DraftSaveResponse,
    SubmissionResponse,
)

router = APIRouter()


def _to_schema(record: ApplicationRecord) -> ApplicationResponse:
    return ApplicationResponse(
        id=record.id,
        owner_id=record.owner_id,
        status=record.status.value,
        personal_info=record.personal_info,
        academic_background=record.academic_background,
        program_selection=record.program_selection,
        accommodation=record.accommodation,
        referee=record.referee,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.get("", response_model=ApplicationListResponse, summary="List my applications")
async def list_applications(
    service: ApplicationSubmissionService = Depends(get_application_service),
) -> ApplicationListResponse:
    try:
        records = await service.list()
    except AdmissionsError as exc:
        raise to_http_exception(exc, "List applications") from exc
    return ApplicationListResponse(
        total=len(records),
        applications=[_to_schema(record) for record in records],
    )


@router.get("/{application_id}", response_model=ApplicationResponse, summary="Get one of my applications")
async def get_application(
    application_id: str,
    service: ApplicationSubmissionService = Depends(get_application_service),
) -> ApplicationResponse:
    try:
        record = await service.get_by_id(application_id)
    except AdmissionsError as exc:
        raise to_http_exception(exc, "Get application") from exc
    return _to_schema(record)


@router.post(
    "/drafts",
    response_model=DraftSaveResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a new draft",
)
async def create_draft(
    payload: ApplicationDraft,
    service: ApplicationSubmissionService = Depends(get_application_service),
) -> DraftSaveResponse:
    try:
        draft_id = await service.save_draft(payload)
    except AdmissionsError as exc:
        raise to_http_exception(exc, "Save draft") from exc
    return DraftSaveResponse(draft_id=draft_id)


@router.put("/drafts/{draft_id}", response_model=DraftSaveResponse, summary="Update one of my drafts")
async def update_draft(
    draft_id: str,
    payload: ApplicationDraft,
    service: ApplicationSubmissionService = Depends(get_application_service),
) -> DraftSaveResponse:
    try:
        saved_id = await service.save_draft(payload, draft_id)
    except AdmissionsError as exc:
        raise to_http_exception(exc, "Update draft") from exc
    return DraftSaveResponse(draft_id=saved_id)


@router.post(
    "/submit",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an application",
)
async def submit_application(
    payload: ApplicationForm,
    draft_id: Optional[str] = None,
    service: ApplicationSubmissionService = Depends(get_application_service),
) -> SubmissionResponse:
    try:
        result = await service.submit(payload, draft_id=draft_id)
    except AdmissionsError as exc:
        raise to_http_exception(exc, "Submit application") from exc
    return SubmissionResponse(
        success=result.success,
        message=result.message,
        application_id=result.application_id,
    )
