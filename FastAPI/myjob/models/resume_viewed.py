from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from myjob.database import Base


class ResumeViewed(Base):
    """One row per (resume, company); views counts repeat visits."""

    __tablename__ = "resumes_viewed"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    views = Column(Integer, default=1, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    resume = relationship("Resume", back_populates="viewed_by")
    company = relationship("Company")

    __table_args__ = (
        UniqueConstraint("resume_id", "company_id", name="uq_resumes_viewed_resume_company"),
    )
