"""
Listing model: one table for the four kinds of post.

`post_type` is the union discriminant. Columns hold the fields every post
type shares; `additional_data` holds only the fields of the listing's own
variant (see app.schemas.listing), keyed by their API names.
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime, ForeignKey, Index

from app.database import Base
from app.database_types import JSONDocument, enum_by_value


class PostType(str, Enum):
    JOB = "job"
    AUCTION = "auction"
    TENDER = "tender"
    ANNOUNCEMENT = "announcement"


class ListingStatus(str, Enum):
    """Moderation workflow: pending -> approved | rejected (admin only)."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class OwnerType(str, Enum):
    COMPANY = "company"
    INDIVIDUAL = "individual"


class JobType(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    REMOTE = "remote"
    TEMPORARY = "temporary"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    INTERMEDIATE = "intermediate"
    SENIOR = "senior"
    EXECUTIVE = "executive"


class Currency(str, Enum):
    RWF = "RWF"
    USD = "USD"
    EUR = "EUR"


class AnnouncementType(str, Enum):
    EVENT = "event"
    POLICY = "policy"
    GENERAL = "general"
    URGENT = "urgent"


class Listing(Base):
    __tablename__ = "jobs"
    __table_args__ = (
        Index("ix_jobs_visible_created", "is_active", "deleted_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_type = Column(enum_by_value(PostType, "post_type"), nullable=False, default=PostType.JOB, index=True)

    # Common fields
    title = Column(String, nullable=False)
    location = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String, nullable=False, index=True)
    requirements = Column(Text, nullable=True)
    deadline = Column(DateTime, nullable=True)

    # Ownership: company_id XOR individual_name
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=True, index=True)
    company_name = Column(String, nullable=True)  # Denormalized at write time
    individual_name = Column(String, nullable=True)
    individual_contact = Column(String, nullable=True)

    # Variant payload for this post_type only
    additional_data = Column(JSONDocument, nullable=False, default=dict)

    # Moderation
    status = Column(
        enum_by_value(ListingStatus, "job_status"),
        nullable=False,
        default=ListingStatus.PENDING,
        index=True
    )
    is_active = Column(Boolean, default=True, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    admin_notes = Column(Text, nullable=True)
    deleted_at = Column(DateTime, nullable=True)  # Soft delete, independent of status

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def owner_type(self) -> OwnerType:
        return OwnerType.COMPANY if self.company_id is not None else OwnerType.INDIVIDUAL

    def is_visible(self) -> bool:
        """Visible to the public browse/search endpoints."""
        return bool(self.is_active) and self.deleted_at is None
