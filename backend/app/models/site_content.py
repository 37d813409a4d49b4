"""Admin-editable site content: homepage featured sections and banner notifications."""
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime

from app.database import Base
from app.database_types import JSONDocument, enum_by_value


class FeaturedSectionKey(str, Enum):
    HOMEPAGE_HERO = "homepageHero"  # {"title", "subtitle", "enabled"}
    FEATURED_JOBS = "featuredJobs"  # [listing ids]
    FEATURED_COMPANIES = "featuredCompanies"  # [company ids]


class FeaturedSection(Base):
    __tablename__ = "featured_sections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String, nullable=False, unique=True)
    content = Column(JSONDocument, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"


class PlatformNotification(Base):
    __tablename__ = "platform_notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    message = Column(Text, nullable=False)
    type = Column(
        enum_by_value(NotificationType, "notification_type"),
        nullable=False,
        default=NotificationType.INFO
    )
    enabled = Column(Boolean, default=True, nullable=False)
    expires_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def is_live(self) -> bool:
        if not self.enabled:
            return False
        return self.expires_at is None or self.expires_at > datetime.utcnow()
