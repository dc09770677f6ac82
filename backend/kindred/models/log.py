from sqlalchemy import Column, String, DateTime, Text, Enum as SQLEnum, ForeignKey
from datetime import datetime
import enum

from kindred.core.database import Base
from kindred.core.types import GUID, generate_uuid


class LogType(str, enum.Enum):
    AUTH = "auth"
    CONFIG = "config"
    EDIT = "edit"
    ERROR = "error"
    MEDIA = "media"
    SEARCH = "search"


class LogEntry(Base):
    """Site activity log, shown to administrators"""
    __tablename__ = "log_entries"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    log_type = Column(SQLEnum(LogType), nullable=False, index=True)
    log_message = Column(Text, nullable=False)
    ip_address = Column(String(45), nullable=False, default="")
    user_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<LogEntry {self.log_type.value}: {self.log_message[:40]}>"
