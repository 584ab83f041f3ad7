"""Route modules for the accounts API."""
from . import auth, settings, uploads

__all__ = ["auth", "settings", "uploads"]
