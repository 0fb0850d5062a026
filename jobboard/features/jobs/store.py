"""Job posting operations."""
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from jobboard.core.errors import ForbiddenError, NotFoundError
from jobboard.core.logging import setup_logging
from jobboard.core.models import Application, Job, UserRole
from jobboard.core.schemas import JobFields
from jobboard.core.security import Identity
from jobboard.core.storage import ResumeStorage
from jobboard.features.access import (
    can_view_job,
    require_job_owner,
    require_object_id,
    require_role,
)

logger = setup_logging('jobs')


def list_jobs(db: Session) -> List[Job]:
    """All postings with the poster's name and email loaded. No pagination."""
    query = (
        select(Job)
        .options(selectinload(Job.poster))
        .order_by(Job.created_at.desc())
    )
    return list(db.scalars(query))


def create_job(db: Session, identity: Identity, fields: JobFields) -> Job:
    """Persist a posting owned by the calling company."""
    require_role(identity, [UserRole.COMPANY])

    job = Job(
        title=fields.title,
        company=fields.company,
        salary=fields.salary,
        location=fields.location,
        description=fields.description,
        skills_required=list(fields.skills_required),
        job_type=fields.job_type.value,
        posted_by=identity.user_id,
        application_count=0,
    )
    db.add(job)
    db.commit()
    db.refresh(job, attribute_names=['poster'])

    logger.info(f"Company {identity.user_id} posted job {job.id}")
    return job


def load_job(db: Session, job_id: str) -> Job:
    """Fetch a job by a validated identifier.

    Raises:
        ValidationError: Malformed identifier
        NotFoundError: No such job
    """
    require_object_id(job_id, "job ID")
    job = db.get(Job, job_id, options=[selectinload(Job.poster)])
    if job is None:
        raise NotFoundError("Job not found")
    return job


def get_job(db: Session, job_id: str, identity: Identity) -> Job:
    """Single job lookup; companies may only open their own postings."""
    job = load_job(db, job_id)
    if not can_view_job(job, identity):
        raise ForbiddenError("Not authorized to view this job")
    return job


def list_my_jobs(db: Session, identity: Identity) -> List[Job]:
    require_role(identity, [UserRole.COMPANY])
    query = (
        select(Job)
        .options(selectinload(Job.poster))
        .where(Job.posted_by == identity.user_id)
        .order_by(Job.created_at.desc())
    )
    return list(db.scalars(query))


def delete_job(db: Session, storage: ResumeStorage, job_id: str, identity: Identity) -> int:
    """Delete a posting together with every application to it.

    The applications and the job are removed in one transaction; résumé
    files are removed only after it commits.

    Returns:
        Number of applications deleted
    """
    require_role(identity, [UserRole.COMPANY])
    job = load_job(db, job_id)
    require_job_owner(job, identity, "Not authorized to delete this job")

    resumes = list(db.scalars(select(Application.resume).where(Application.job_id == job.id)))
    try:
        result = db.execute(delete(Application).where(Application.job_id == job.id))
        db.execute(delete(Job).where(Job.id == job.id))
        db.commit()
    except Exception:
        db.rollback()
        raise

    for filename in resumes:
        try:
            storage.delete(filename)
        except OSError as e:
            logger.error(f"Could not remove resume {filename} of deleted job {job_id}: {e}")

    logger.info(f"Company {identity.user_id} deleted job {job_id} and {result.rowcount} applications")
    return result.rowcount
