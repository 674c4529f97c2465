"""Profile update feature package."""

from .actions import is_updated, reset_profile_update, update_password, update_profile

__all__ = ['is_updated', 'reset_profile_update', 'update_password', 'update_profile']
