import enum

from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from myjob.database import Base


class JobPostStatus(enum.IntEnum):
    PENDING = 1
    NOT_APPROVED = 2
    PUBLISHED = 3


class JobPost(Base):
    __tablename__ = "job_posts"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String, unique=True, nullable=False, index=True)
    job_name = Column(String, nullable=False, index=True)
    deadline = Column(Date, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    gender_required = Column(String, nullable=True)
    job_description = Column(Text, nullable=True)
    job_requirement = Column(Text, nullable=True)
    benefits_enjoyed = Column(Text, nullable=True)
    position = Column(Integer, nullable=True)
    type_of_workplace = Column(Integer, nullable=True)
    experience = Column(Integer, nullable=True)
    academic_level = Column(Integer, nullable=True)
    job_type = Column(Integer, nullable=True)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    is_hot = Column(Boolean, default=False, nullable=False)
    is_urgent = Column(Boolean, default=False, nullable=False)
    contact_person_name = Column(String, nullable=True)
    contact_person_phone = Column(String, nullable=True)
    contact_person_email = Column(String, nullable=True)
    views = Column(Integer, default=0, nullable=False)
    status = Column(Integer, default=JobPostStatus.PENDING.value, nullable=False, index=True)
    career_id = Column(Integer, ForeignKey("careers.id"), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    career = relationship("Career")
    company = relationship("Company", back_populates="job_posts")
    user = relationship("User", back_populates="job_posts")
    location = relationship("Location", cascade="all, delete-orphan", single_parent=True)
    activities = relationship("JobPostActivity", back_populates="job_post", passive_deletes=True)
