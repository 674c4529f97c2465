"""Users feature package."""

from .actions import clear_user_errors, get_user, is_authenticated, login, logout, register

__all__ = ['clear_user_errors', 'get_user', 'is_authenticated', 'login', 'logout', 'register']
