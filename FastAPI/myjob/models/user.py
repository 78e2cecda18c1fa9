import enum

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from myjob.database import Base


class RoleName(str, enum.Enum):
    JOB_SEEKER = "JOB_SEEKER"
    EMPLOYER = "EMPLOYER"


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    avatar_url = Column(String, nullable=True)
    role_name = Column(String, nullable=False, default=RoleName.JOB_SEEKER.value)
    is_active = Column(Boolean, default=True, nullable=False)
    is_verify_email = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    job_seeker_profile = relationship("JobSeekerProfile", back_populates="user", uselist=False)
    company = relationship("Company", back_populates="user", uselist=False)
    resumes = relationship("Resume", back_populates="user")
    job_posts = relationship("JobPost", back_populates="user")
