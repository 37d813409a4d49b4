"""Company profile owned by an employer user."""
from sqlalchemy import Column, String, Integer, Text, ForeignKey

from app.database import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # One company per employer, enforced by upsert-by-owner in the API
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String, nullable=False, index=True)
    industry = Column(String, nullable=False)
    location = Column(String, nullable=False)
    logo = Column(String, nullable=True)
    website = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    employee_count = Column(String, nullable=True)  # e.g. "11-50"
    founded = Column(String, nullable=True)
