"""Job-related models."""
from typing import Optional, List
from datetime import datetime

from jobboard.core.models import Job
from jobboard.core.schemas import CamelModel


class PosterSummary(CamelModel):
    """Account that posted a job."""
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class JobResponse(CamelModel):
    """Job response model."""
    id: str
    title: str
    company: str
    salary: str
    location: str
    description: str
    posted_by: PosterSummary
    application_count: int = 0
    skills_required: List[str] = []
    job_type: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_job(cls, job: Job) -> "JobResponse":
        poster = job.poster
        if poster is not None:
            posted_by = PosterSummary(id=poster.id, name=poster.name, email=poster.email)
        else:
            posted_by = PosterSummary(id=job.posted_by)

        return cls(
            id=job.id,
            title=job.title,
            company=job.company,
            salary=job.salary,
            location=job.location,
            description=job.description,
            posted_by=posted_by,
            application_count=job.application_count,
            skills_required=list(job.skills_required or []),
            job_type=job.job_type,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )


class JobEnvelope(CamelModel):
    success: bool = True
    message: Optional[str] = None
    job: JobResponse


class JobListEnvelope(CamelModel):
    success: bool = True
    jobs: List[JobResponse]


class JobDeletedEnvelope(CamelModel):
    success: bool = True
    message: str
    deleted_applications: int
