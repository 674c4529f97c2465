"""FastAPI application models."""

from .jobs import JobCreate
from .users import LoginRequest, PasswordUpdate, ProfileUpdate, RegisterRequest

__all__ = [
    'JobCreate',
    'LoginRequest',
    'PasswordUpdate',
    'ProfileUpdate',
    'RegisterRequest',
]
