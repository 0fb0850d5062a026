"""Job posting store."""

from .store import create_job, delete_job, get_job, list_jobs, list_my_jobs, load_job

__all__ = ['create_job', 'delete_job', 'get_job', 'list_jobs', 'list_my_jobs', 'load_job']
