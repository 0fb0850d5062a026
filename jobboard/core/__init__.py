"""Core functionality for the jobboard package."""

from .logging import setup_logging
from .config import Settings
from .context import AppContext
from .database import Base, session_scope

__all__ = [
    'setup_logging',
    'Settings',
    'AppContext',
    'Base',
    'session_scope',
]
