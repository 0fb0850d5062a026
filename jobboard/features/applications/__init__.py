"""Application workflow engine."""

from .workflow import (
    STATUS_TRANSITIONS,
    VALID_STATUSES,
    fetch_resume,
    is_allowed_transition,
    list_for_applicant,
    list_for_company,
    list_for_job,
    reconcile_application_counts,
    set_status,
    submit_application,
)

__all__ = [
    'STATUS_TRANSITIONS',
    'VALID_STATUSES',
    'fetch_resume',
    'is_allowed_transition',
    'list_for_applicant',
    'list_for_company',
    'list_for_job',
    'reconcile_application_counts',
    'set_status',
    'submit_application',
]
