"""Role and ownership checks.

Every sensitive operation passes through one of these gates. Ownership
violations raise ``ForbiddenError`` rather than ``NotFoundError``: the
existence of a job or application is not hidden, only access to it.
"""
from typing import Iterable

from jobboard.core.database import is_valid_object_id
from jobboard.core.errors import ForbiddenError, ValidationError
from jobboard.core.models import Application, Job, UserRole
from jobboard.core.security import Identity


def require_role(identity: Identity, allowed: Iterable[UserRole]) -> Identity:
    """Reject the caller unless their role is in ``allowed``."""
    allowed_values = {UserRole(role).value for role in allowed}
    if identity.role not in allowed_values:
        raise ForbiddenError(
            f"User role {identity.role} is not authorized to access this route"
        )
    return identity


def require_object_id(value, label: str = "ID") -> str:
    """Validate identifier syntax before the value reaches a query.

    Raises:
        ValidationError: ``"Invalid <label> format"`` for malformed identifiers
    """
    if not is_valid_object_id(value):
        raise ValidationError(f"Invalid {label} format")
    return value


def is_job_owner(job: Job, identity: Identity) -> bool:
    return job.posted_by == identity.user_id


def require_job_owner(job: Job, identity: Identity, message: str = "Not authorized to access this job") -> Job:
    if not is_job_owner(job, identity):
        raise ForbiddenError(message)
    return job


def can_view_job(job: Job, identity: Identity) -> bool:
    """Companies may only open their own postings; other roles may open any.

    Listing stays open to everyone; see DESIGN.md for why the asymmetry is kept.
    """
    if identity.role == UserRole.COMPANY.value:
        return is_job_owner(job, identity)
    return True


def can_access_resume(application: Application, identity: Identity) -> bool:
    """The applicant, or the company that owns the job applied to."""
    if application.user_id == identity.user_id:
        return True
    return application.job is not None and is_job_owner(application.job, identity)
