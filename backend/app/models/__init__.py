"""SQLAlchemy models exposed for metadata creation and imports."""
from .app_setting import AppSetting
from .user import User

__all__ = ["User", "AppSetting"]
