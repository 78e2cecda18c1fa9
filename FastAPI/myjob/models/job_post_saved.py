from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from myjob.database import Base


class JobPostSaved(Base):
    __tablename__ = "job_posts_saved"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_post_id = Column(Integer, ForeignKey("job_posts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User")
    job_post = relationship("JobPost")

    __table_args__ = (
        UniqueConstraint("user_id", "job_post_id", name="uq_job_posts_saved_user_job"),
    )
