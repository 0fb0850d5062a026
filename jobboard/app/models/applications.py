"""Application-related models."""
from typing import Optional, List
from datetime import datetime

from pydantic import BaseModel

from jobboard.core.models import Application, Job, User
from jobboard.core.schemas import CamelModel


class ApplicantSummary(CamelModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_user(cls, user: Optional[User], user_id: str) -> "ApplicantSummary":
        if user is None:
            return cls(id=user_id)
        return cls(id=user.id, name=user.name, email=user.email)


class CompanySummary(CamelModel):
    """Posting company as shown to applicants."""
    id: str
    name: Optional[str] = None


class JobSummary(CamelModel):
    """Job fields joined into application listings."""
    id: str
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[str] = None
    posted_by: Optional[CompanySummary] = None

    @classmethod
    def from_job(cls, job: Job, *fields: str, with_poster: bool = False) -> "JobSummary":
        data = {name: getattr(job, name) for name in fields}
        if with_poster and job.poster is not None:
            data['posted_by'] = CompanySummary(id=job.poster.id, name=job.poster.name)
        return cls(id=job.id, **data)


class ApplicationResponse(CamelModel):
    """Application as seen by the owning company or the applicant."""
    id: str
    job: JobSummary
    user: Optional[ApplicantSummary] = None
    resume: str
    cover_letter: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def for_company(cls, application: Application, job_fields=('title', 'company', 'location')) -> "ApplicationResponse":
        return cls(
            id=application.id,
            job=JobSummary.from_job(application.job, *job_fields),
            user=ApplicantSummary.from_user(application.user, application.user_id),
            resume=application.resume,
            cover_letter=application.cover_letter,
            status=application.status,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )

    @classmethod
    def for_applicant(cls, application: Application) -> "ApplicationResponse":
        return cls(
            id=application.id,
            job=JobSummary.from_job(
                application.job, 'title', 'company', 'location', 'salary', with_poster=True
            ),
            resume=application.resume,
            status=application.status,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )


class StatusUpdateRequest(BaseModel):
    status: Optional[str] = None


class ApplicationEnvelope(CamelModel):
    success: bool = True
    message: str
    application: ApplicationResponse


class ApplicationListEnvelope(CamelModel):
    success: bool = True
    count: int
    applications: List[ApplicationResponse]


class JobApplicationsEnvelope(ApplicationListEnvelope):
    job: JobSummary
