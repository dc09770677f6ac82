from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime

from kindred.core.database import Base


class SiteSetting(Base):
    """Site-wide preference, keyed by name"""
    __tablename__ = "site_settings"

    setting_name = Column(String(32), primary_key=True)
    setting_value = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<SiteSetting {self.setting_name}>"
