from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Index

from app.database import Base
from app.database_types import enum_by_value


class ApplicationStatus(str, Enum):
    """
    Application lifecycle.

    No transition graph is enforced: employers may set any status from
    any other through the status update endpoint.
    """
    APPLIED = "applied"
    REVIEWED = "reviewed"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    HIRED = "hired"
    REJECTED = "rejected"


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        Index("ix_applications_user_job", "user_id", "job_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    cover_letter = Column(Text, nullable=True)
    resume_url = Column(String, nullable=True)

    status = Column(
        enum_by_value(ApplicationStatus, "application_status"),
        nullable=False,
        default=ApplicationStatus.APPLIED
    )

    applied_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
