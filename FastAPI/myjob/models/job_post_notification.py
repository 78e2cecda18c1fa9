from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from myjob.database import Base


class JobPostNotification(Base):
    """Saved search: notify the user about new posts matching these criteria."""

    __tablename__ = "job_post_notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    career_id = Column(Integer, ForeignKey("careers.id"), nullable=False)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False)
    job_name = Column(String, nullable=False)
    position = Column(Integer, nullable=True)
    experience = Column(Integer, nullable=True)
    salary = Column(Integer, nullable=True)
    frequency = Column(Integer, nullable=False, default=7)  # days between digests
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User")
    career = relationship("Career")
    city = relationship("City")
