from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from myjob.database import Base


class ResumeSaved(Base):
    """A candidate resume bookmarked by an employer's company."""

    __tablename__ = "resumes_saved"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    resume = relationship("Resume", back_populates="saved_by")
    company = relationship("Company")

    __table_args__ = (
        UniqueConstraint("resume_id", "company_id", name="uq_resumes_saved_resume_company"),
    )
