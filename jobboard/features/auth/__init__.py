"""Authentication: signup, login and token resolution."""

from .service import get_current_user, login, normalize_email, resolve_token, signup

__all__ = ['get_current_user', 'login', 'normalize_email', 'resolve_token', 'signup']
