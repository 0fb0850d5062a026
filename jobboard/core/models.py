"""SQLAlchemy models for users, job postings and applications."""
from datetime import datetime, timezone
from enum import Enum
from typing import List

from sqlalchemy import JSON, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobboard.core.database import Base, new_object_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserRole(str, Enum):
    """Account roles.

    Attributes:
        JOB_SEEKER: Applies to jobs and tracks their own applications
        COMPANY: Posts jobs and reviews the applications they receive
        ADMIN: Reserved; cannot be chosen at signup
    """
    JOB_SEEKER = "jobSeeker"
    COMPANY = "company"
    ADMIN = "admin"


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    REMOTE = "remote"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class User(Base):
    """Model for registered accounts."""
    __tablename__ = 'users'

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255))  # bcrypt hash
    role: Mapped[str] = mapped_column(String(20), default=UserRole.JOB_SEEKER.value)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    jobs = relationship('Job', back_populates='poster')
    applications = relationship('Application', back_populates='user')


class Job(Base):
    """Model for job postings owned by a company account."""
    __tablename__ = 'jobs'

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    title: Mapped[str] = mapped_column(String(100))
    company: Mapped[str] = mapped_column(String(100))
    salary: Mapped[str] = mapped_column(String(100))
    location: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    posted_by: Mapped[str] = mapped_column(ForeignKey('users.id'), index=True)
    application_count: Mapped[int] = mapped_column(Integer, default=0)
    skills_required: Mapped[List[str]] = mapped_column(JSON, default=list)
    job_type: Mapped[str] = mapped_column(String(20), default=JobType.FULL_TIME.value)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    poster = relationship('User', back_populates='jobs')
    applications = relationship('Application', back_populates='job')


class Application(Base):
    """Model for a job seeker's application to one job."""
    __tablename__ = 'applications'
    __table_args__ = (
        UniqueConstraint('job_id', 'user_id', name='uq_application_job_user'),
    )

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    job_id: Mapped[str] = mapped_column(ForeignKey('jobs.id'), index=True)
    user_id: Mapped[str] = mapped_column(ForeignKey('users.id'), index=True)
    resume: Mapped[str] = mapped_column(String(255), unique=True)  # stored filename
    cover_letter: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(20), default=ApplicationStatus.PENDING.value, index=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    job = relationship('Job', back_populates='applications')
    user = relationship('User', back_populates='applications')
