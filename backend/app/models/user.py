from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Text
import enum

from app.database import Base
from app.database_types import enum_by_value


class UserRole(str, enum.Enum):
    """User role for role-based access control (RBAC)."""
    JOB_SEEKER = "job_seeker"  # Browses listings, applies, registers interest
    EMPLOYER = "employer"  # Owns one company, posts listings for it
    ADMIN = "admin"  # Moderates listings, manages users and site content


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String, unique=True, nullable=False, index=True)

    # bcrypt hash; NULL for accounts created through Firebase or social login
    password = Column(String, nullable=True)
    firebase_uid = Column(String, unique=True, nullable=True, index=True)

    role = Column(
        enum_by_value(UserRole, "user_role"),
        nullable=False,
        default=UserRole.JOB_SEEKER,
        index=True
    )

    # Profile information
    full_name = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=True)
    profile_picture = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
