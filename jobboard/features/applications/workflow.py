"""Application workflow: submission, status changes, listings and résumé access.

Submission writes the résumé file first, then inserts the application and
bumps ``Job.application_count`` inside a single database transaction. The
count is incremented with an ``UPDATE ... SET count = count + 1`` statement,
never read-modify-write, and the ``(job_id, user_id)`` unique constraint is
what ultimately prevents duplicate applications; the pre-check only gives
the common case a clean error. If anything after the file write fails, the
transaction is rolled back and the file removed.
"""
from typing import Dict, Iterator, List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from jobboard.core.errors import (
    ConflictError,
    ForbiddenError,
    JobBoardError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from jobboard.core.logging import setup_logging
from jobboard.core.models import Application, ApplicationStatus, Job, UserRole
from jobboard.core.security import Identity
from jobboard.core.storage import ResumeStorage, check_stored_name, resume_content_type
from jobboard.features.access import (
    can_access_resume,
    require_job_owner,
    require_object_id,
    require_role,
)
from jobboard.features.jobs import load_job

logger = setup_logging('applications')

VALID_STATUSES = tuple(status.value for status in ApplicationStatus)

# Used only when the strict workflow is enabled; a status may always be
# rewritten to itself.
STATUS_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    ApplicationStatus.PENDING.value: (ApplicationStatus.REVIEWED.value,),
    ApplicationStatus.REVIEWED.value: (
        ApplicationStatus.ACCEPTED.value,
        ApplicationStatus.REJECTED.value,
    ),
    ApplicationStatus.ACCEPTED.value: (),
    ApplicationStatus.REJECTED.value: (),
}

DUPLICATE_MESSAGE = "You have already applied for this job"


def is_allowed_transition(current: str, target: str, strict: bool = False) -> bool:
    """Check a status change.

    The permissive workflow accepts any valid status from any state; the
    strict one follows ``STATUS_TRANSITIONS``.
    """
    if target not in VALID_STATUSES:
        return False
    if not strict or current == target:
        return True
    return target in STATUS_TRANSITIONS.get(current, ())


def find_existing_application(db: Session, job_id: str, user_id: str) -> Optional[Application]:
    return db.scalar(
        select(Application).where(Application.job_id == job_id, Application.user_id == user_id)
    )


def _with_relations(db: Session, application_id: str) -> Application:
    return db.scalar(
        select(Application)
        .options(selectinload(Application.job), selectinload(Application.user))
        .where(Application.id == application_id)
        .execution_options(populate_existing=True)
    )


def submit_application(
    db: Session,
    storage: ResumeStorage,
    identity: Identity,
    job_id: Optional[str],
    resume_content: Optional[bytes],
    resume_name: Optional[str],
    cover_letter: Optional[str] = None,
) -> Application:
    """Apply to a job on behalf of the calling job seeker.

    Returns:
        The created application with ``job`` and ``user`` loaded

    Raises:
        ForbiddenError: Caller is not a job seeker
        ValidationError: Missing résumé or job ID, malformed job ID, or a
            rejected résumé file
        NotFoundError: No such job
        ConflictError: The caller already applied to this job
        ServerError: Persisting the application failed
    """
    require_role(identity, [UserRole.JOB_SEEKER])

    if resume_content is None or not resume_name:
        raise ValidationError("Resume file is required")
    if not job_id:
        raise ValidationError("Job ID is required")
    require_object_id(job_id, "job ID")

    load_job(db, job_id)
    if find_existing_application(db, job_id, identity.user_id) is not None:
        raise ConflictError(DUPLICATE_MESSAGE)

    filename = storage.save(resume_content, resume_name)

    try:
        application = Application(
            job_id=job_id,
            user_id=identity.user_id,
            resume=filename,
            cover_letter=cover_letter or "",
            status=ApplicationStatus.PENDING.value,
        )
        db.add(application)
        db.flush()

        result = db.execute(
            update(Job)
            .where(Job.id == job_id)
            .values(application_count=Job.application_count + 1)
        )
        if result.rowcount != 1:
            raise NotFoundError("Job not found")

        db.commit()
    except IntegrityError:
        db.rollback()
        storage.delete(filename)
        # Either the unique pair or the job foreign key was violated
        if db.get(Job, job_id) is None:
            logger.warning(f"Job {job_id} was deleted during submission by {identity.user_id}")
            raise NotFoundError("Job not found")
        logger.warning(f"Duplicate application by {identity.user_id} for job {job_id}")
        raise ConflictError(DUPLICATE_MESSAGE)
    except JobBoardError:
        db.rollback()
        storage.delete(filename)
        raise
    except Exception as e:
        db.rollback()
        storage.delete(filename)
        logger.error(f"Application submission failed for job {job_id}: {str(e)}", exc_info=True)
        raise ServerError("Server error during application submission", detail=str(e))

    logger.info(f"Job seeker {identity.user_id} applied to job {job_id} ({application.id})")
    return _with_relations(db, application.id)


def set_status(
    db: Session,
    identity: Identity,
    application_id: str,
    new_status: Optional[str],
    strict: bool = False,
) -> Application:
    """Change an application's status; only the owning company may do this."""
    require_role(identity, [UserRole.COMPANY])

    if new_status not in VALID_STATUSES:
        raise ValidationError("Invalid status value")
    require_object_id(application_id, "application ID")

    application = _with_relations(db, application_id)
    if application is None:
        raise NotFoundError("Application not found")

    require_job_owner(application.job, identity, "Not authorized to update this application")

    if not is_allowed_transition(application.status, new_status, strict=strict):
        raise ValidationError(
            f"Cannot change status from {application.status} to {new_status}"
        )

    previous = application.status
    application.status = new_status
    db.commit()

    logger.info(f"Application {application.id} status {previous} -> {new_status}")
    return application


def list_for_company(db: Session, identity: Identity) -> List[Application]:
    """Applications across every job the company owns, newest first."""
    require_role(identity, [UserRole.COMPANY])
    query = (
        select(Application)
        .join(Application.job)
        .where(Job.posted_by == identity.user_id)
        .options(selectinload(Application.job), selectinload(Application.user))
        .order_by(Application.created_at.desc())
    )
    return list(db.scalars(query))


def list_for_job(db: Session, identity: Identity, job_id: str) -> Tuple[Job, List[Application]]:
    """Applications for one job owned by the calling company, newest first."""
    require_role(identity, [UserRole.COMPANY])
    job = load_job(db, job_id)
    require_job_owner(job, identity, "Not authorized to view applications for this job")

    query = (
        select(Application)
        .where(Application.job_id == job.id)
        .options(selectinload(Application.user))
        .order_by(Application.created_at.desc())
    )
    return job, list(db.scalars(query))


def list_for_applicant(db: Session, identity: Identity) -> List[Application]:
    """The caller's own applications with job and posting company loaded."""
    require_role(identity, [UserRole.JOB_SEEKER])
    query = (
        select(Application)
        .where(Application.user_id == identity.user_id)
        .options(selectinload(Application.job).selectinload(Job.poster))
        .order_by(Application.created_at.desc())
    )
    return list(db.scalars(query))


def fetch_resume(
    db: Session,
    storage: ResumeStorage,
    identity: Identity,
    filename: str,
) -> Tuple[Iterator[bytes], str]:
    """Stream a résumé to its applicant or to the company that owns the job.

    Returns:
        ``(chunks, content_type)``
    """
    check_stored_name(filename)

    application = db.scalar(
        select(Application)
        .options(selectinload(Application.job))
        .where(Application.resume == filename)
    )
    if application is None:
        raise NotFoundError("Resume not found")

    if not can_access_resume(application, identity):
        raise ForbiddenError("Not authorized to access this file")

    if not storage.exists(filename):
        raise NotFoundError("Resume file not found")

    return storage.iter_bytes(filename), resume_content_type(filename)


def reconcile_application_counts(db: Session) -> Dict[str, Tuple[int, int]]:
    """Recompute every job's application count from the applications table.

    The correction is a single ``UPDATE`` whose new value is a correlated
    count, so submissions committed meanwhile are never overwritten with a
    stale total.

    Returns:
        ``{job_id: (stored_count, actual_count)}`` for each corrected job, as
        observed just before the update
    """
    actual_count = (
        select(func.count(Application.id))
        .where(Application.job_id == Job.id)
        .scalar_subquery()
    )

    corrected = {
        job_id: (stored, count)
        for job_id, stored, count in db.execute(
            select(Job.id, Job.application_count, actual_count)
            .where(Job.application_count != actual_count)
        ).all()
    }

    if corrected:
        db.execute(
            update(Job)
            .where(Job.application_count != actual_count)
            .values(application_count=actual_count)
            .execution_options(synchronize_session="fetch")
        )
    db.commit()

    for job_id, (stored, count) in corrected.items():
        logger.warning(f"Corrected application count of job {job_id}: {stored} -> {count}")
    return corrected
