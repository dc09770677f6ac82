# Re-export all models so Base.metadata knows every table
from kindred.models.user import User, UserPreference, UserRole
from kindred.models.site_setting import SiteSetting
from kindred.models.log import LogEntry, LogType

__all__ = [
    "User",
    "UserPreference",
    "UserRole",
    "SiteSetting",
    "LogEntry",
    "LogType",
]
