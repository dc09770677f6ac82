from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from kindred.core.database import Base
from kindred.core.types import GUID, generate_uuid


class UserRole(str, enum.Enum):
    """Site-wide roles"""
    MEMBER = "member"
    EDITOR = "editor"
    MANAGER = "manager"
    ADMIN = "admin"


class User(Base):
    """A registered account"""
    __tablename__ = "users"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_name = Column(String(32), unique=True, index=True, nullable=False)
    real_name = Column(String(64), nullable=False, default="")
    email = Column(String(64), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=True)

    role = Column(SQLEnum(UserRole), default=UserRole.MEMBER, nullable=False)
    is_active = Column(Boolean, default=True)
    verified = Column(Boolean, default=False)
    approved = Column(Boolean, default=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login = Column(DateTime, nullable=True)

    # Loaded with the user so preferences can be read without another await
    preferences = relationship(
        "UserPreference",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def get_preference(self, setting_name: str, default: str = "") -> str:
        for preference in self.preferences:
            if preference.setting_name == setting_name:
                return preference.setting_value
        return default

    def set_preference(self, setting_name: str, setting_value: str) -> None:
        for preference in self.preferences:
            if preference.setting_name == setting_name:
                preference.setting_value = setting_value
                return
        self.preferences.append(UserPreference(setting_name=setting_name, setting_value=setting_value))

    def delete_preference(self, setting_name: str) -> None:
        self.preferences = [p for p in self.preferences if p.setting_name != setting_name]

    def __repr__(self):
        return f"<User {self.user_name}>"


class UserPreference(Base):
    """Per-user key/value setting (language, password tokens, ...)"""
    __tablename__ = "user_settings"
    __table_args__ = (
        UniqueConstraint("user_id", "setting_name", name="uq_user_settings_name"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    setting_name = Column(String(32), nullable=False)
    setting_value = Column(Text, nullable=False, default="")

    user = relationship("User", back_populates="preferences")

    def __repr__(self):
        return f"<UserPreference {self.setting_name}>"
