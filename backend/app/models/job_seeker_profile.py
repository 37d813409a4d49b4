from sqlalchemy import Column, String, Integer, Text, ForeignKey

from app.database import Base
from app.database_types import JSONDocument


class JobSeekerProfile(Base):
    __tablename__ = "job_seeker_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)

    # Professional headline; its words drive listing recommendations
    title = Column(String, nullable=True)
    skills = Column(JSONDocument, nullable=True, default=list)
    experience = Column(Text, nullable=True)
    education = Column(Text, nullable=True)
    resume_url = Column(String, nullable=True)
    cover_letter_url = Column(String, nullable=True)
