"""FastAPI application models."""

from .auth import AuthResponse, CurrentUserResponse, LoginRequest, SignupRequest, UserPublic
from .jobs import JobDeletedEnvelope, JobEnvelope, JobListEnvelope, JobResponse
from .applications import (
    ApplicationEnvelope,
    ApplicationListEnvelope,
    ApplicationResponse,
    JobApplicationsEnvelope,
    StatusUpdateRequest,
)

__all__ = [
    'AuthResponse',
    'CurrentUserResponse',
    'LoginRequest',
    'SignupRequest',
    'UserPublic',
    'JobDeletedEnvelope',
    'JobEnvelope',
    'JobListEnvelope',
    'JobResponse',
    'ApplicationEnvelope',
    'ApplicationListEnvelope',
    'ApplicationResponse',
    'JobApplicationsEnvelope',
    'StatusUpdateRequest',
]
