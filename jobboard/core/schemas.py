"""Core Pydantic models shared by the services and the HTTP layer.

JSON field names are camelCase (``skillsRequired``, ``jobType``); Python
attribute names stay snake_case. Unknown fields are ignored, so a client
cannot set ``postedBy`` or ``applicationCount`` through a job payload.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from jobboard.core.models import JobType


class CamelModel(BaseModel):
    """Base model serializing to camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class JobFields(CamelModel):
    """Fields a company supplies when posting a job.

    Attributes:
        title: Job title, at most 100 characters
        company: Company name, at most 100 characters
        salary: Free-text salary information
        location: Where the job is based
        description: Full job description
        skills_required: Ordered list of required skills
        job_type: One of full-time, part-time, contract, internship, remote
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=100)
    company: str = Field(min_length=1, max_length=100)
    salary: str = Field(min_length=1)
    location: str = Field(min_length=1)
    description: str = Field(min_length=1)
    skills_required: List[str] = Field(default_factory=list)
    job_type: JobType = JobType.FULL_TIME

    @field_validator('skills_required')
    @classmethod
    def drop_blank_skills(cls, skills: List[str]) -> List[str]:
        return [skill.strip() for skill in skills if skill and skill.strip()]
