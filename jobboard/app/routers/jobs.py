from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..models.jobs import JobDeletedEnvelope, JobEnvelope, JobListEnvelope, JobResponse
from ..dependencies import get_context, get_db, get_identity, require_roles

from jobboard.core.context import AppContext
from jobboard.core.models import UserRole
from jobboard.core.schemas import JobFields
from jobboard.core.security import Identity
from jobboard.features import jobs as job_store

router = APIRouter()


@router.get("", response_model=JobListEnvelope)
async def list_jobs(db: Session = Depends(get_db)):
    """List every job posting with its poster's name and email"""
    jobs = job_store.list_jobs(db)
    return JobListEnvelope(jobs=[JobResponse.from_job(job) for job in jobs])


@router.post("", response_model=JobEnvelope, status_code=status.HTTP_201_CREATED)
async def create_job(
    fields: JobFields,
    identity: Identity = Depends(require_roles(UserRole.COMPANY)),
    db: Session = Depends(get_db)
):
    """Post a new job (companies only)"""
    job = job_store.create_job(db, identity, fields)
    return JobEnvelope(message="Job posted successfully", job=JobResponse.from_job(job))


# Must stay above /{job_id}
@router.get("/my", response_model=JobListEnvelope)
async def list_my_jobs(
    identity: Identity = Depends(require_roles(UserRole.COMPANY)),
    db: Session = Depends(get_db)
):
    """List jobs posted by the calling company"""
    jobs = job_store.list_my_jobs(db, identity)
    return JobListEnvelope(jobs=[JobResponse.from_job(job) for job in jobs])


@router.get("/{job_id}", response_model=JobEnvelope)
async def get_job(
    job_id: str,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Get details for a specific job"""
    job = job_store.get_job(db, job_id, identity)
    return JobEnvelope(job=JobResponse.from_job(job))


@router.delete("/{job_id}", response_model=JobDeletedEnvelope)
async def delete_job(
    job_id: str,
    identity: Identity = Depends(require_roles(UserRole.COMPANY)),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context)
):
    """Delete a job and every application to it"""
    deleted = job_store.delete_job(db, context.storage, job_id, identity)
    return JobDeletedEnvelope(message="Job deleted", deleted_applications=deleted)
