from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from typing import Optional

from ..models.applications import (
    ApplicationEnvelope, ApplicationListEnvelope, ApplicationResponse,
    JobApplicationsEnvelope, JobSummary, StatusUpdateRequest
)
from ..dependencies import get_context, get_db, get_identity, require_roles

from jobboard.core.context import AppContext
from jobboard.core.models import UserRole
from jobboard.core.security import Identity
from jobboard.features import applications as workflow

router = APIRouter()


@router.post(
    "",
    response_model=ApplicationEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED
)
async def submit_application(
    resume: Optional[UploadFile] = File(None),
    job_id: Optional[str] = Form(None, alias="jobId"),
    cover_letter: Optional[str] = Form(None, alias="coverLetter"),
    identity: Identity = Depends(require_roles(UserRole.JOB_SEEKER)),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context)
):
    """Apply for a job with a résumé upload (job seekers only)"""
    content, filename = None, None
    if resume is not None and resume.filename:
        # One byte past the limit is enough for the size check to reject it
        content = await resume.read(context.storage.max_bytes + 1)
        filename = resume.filename

    application = workflow.submit_application(
        db,
        context.storage,
        identity,
        job_id=job_id,
        resume_content=content,
        resume_name=filename,
        cover_letter=cover_letter,
    )
    return ApplicationEnvelope(
        message="Application submitted successfully",
        application=ApplicationResponse.for_company(application, job_fields=('title', 'company')),
    )


@router.get("/resume/{filename}")
async def get_resume(
    filename: str,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context)
):
    """Stream a résumé to its applicant or to the company that owns the job"""
    chunks, content_type = workflow.fetch_resume(db, context.storage, identity, filename)
    return StreamingResponse(
        chunks,
        media_type=content_type,
        headers={"Content-Disposition": f'inline; filename="{filename}"'}
    )


@router.get("/company", response_model=ApplicationListEnvelope, response_model_exclude_none=True)
async def list_company_applications(
    identity: Identity = Depends(require_roles(UserRole.COMPANY)),
    db: Session = Depends(get_db)
):
    """Applications for every job posted by the calling company"""
    applications = workflow.list_for_company(db, identity)
    return ApplicationListEnvelope(
        count=len(applications),
        applications=[ApplicationResponse.for_company(app) for app in applications],
    )


@router.get("/job/{job_id}", response_model=JobApplicationsEnvelope, response_model_exclude_none=True)
async def list_job_applications(
    job_id: str,
    identity: Identity = Depends(require_roles(UserRole.COMPANY)),
    db: Session = Depends(get_db)
):
    """Applications for one job owned by the calling company"""
    job, applications = workflow.list_for_job(db, identity, job_id)
    return JobApplicationsEnvelope(
        job=JobSummary.from_job(job, 'title', 'company'),
        count=len(applications),
        applications=[ApplicationResponse.for_company(app) for app in applications],
    )


@router.get("/my", response_model=ApplicationListEnvelope, response_model_exclude_none=True)
async def list_my_applications(
    identity: Identity = Depends(require_roles(UserRole.JOB_SEEKER)),
    db: Session = Depends(get_db)
):
    """The calling job seeker's own applications"""
    applications = workflow.list_for_applicant(db, identity)
    return ApplicationListEnvelope(
        count=len(applications),
        applications=[ApplicationResponse.for_applicant(app) for app in applications],
    )


@router.put("/{application_id}/status", response_model=ApplicationEnvelope, response_model_exclude_none=True)
async def update_application_status(
    application_id: str,
    payload: StatusUpdateRequest,
    identity: Identity = Depends(require_roles(UserRole.COMPANY)),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context)
):
    """Set an application's status (owning company only)"""
    application = workflow.set_status(
        db,
        identity,
        application_id,
        payload.status,
        strict=context.settings.strict_status_workflow,
    )
    return ApplicationEnvelope(
        message="Application status updated",
        application=ApplicationResponse.for_company(application, job_fields=('title',)),
    )
