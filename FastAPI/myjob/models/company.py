from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from myjob.database import Base

DEFAULT_COMPANY_IMAGE_URL = "https://res.cloudinary.com/dtnpj540t/image/upload/v1682831706/my-job/images_default/company_image_default.png"
DEFAULT_COMPANY_COVER_IMAGE_URL = "https://cdn1.vieclam24h.vn/tvn/images/assets/img/generic_18.jpg"


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=True)
    company_name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)
    company_email = Column(String, nullable=False)
    company_phone = Column(String, nullable=False)
    website_url = Column(String, nullable=True)
    tax_code = Column(String, nullable=False)
    since = Column(Date, nullable=True)
    field_operation = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    employee_size = Column(Integer, nullable=True)
    company_image_url = Column(String, nullable=False, default=DEFAULT_COMPANY_IMAGE_URL)
    company_cover_image_url = Column(String, nullable=False, default=DEFAULT_COMPANY_COVER_IMAGE_URL)
    facebook_url = Column(String, nullable=True)
    youtube_url = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="company")
    location = relationship("Location", cascade="all, delete-orphan", single_parent=True)
    images = relationship(
        "CompanyImage",
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="CompanyImage.id",
    )
    job_posts = relationship("JobPost", back_populates="company")
