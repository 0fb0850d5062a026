"""Authorization policy for jobs, applications and résumés."""

from .policy import (
    can_access_resume,
    can_view_job,
    is_job_owner,
    require_job_owner,
    require_object_id,
    require_role,
)

__all__ = [
    'can_access_resume',
    'can_view_job',
    'is_job_owner',
    'require_job_owner',
    'require_object_id',
    'require_role',
]
