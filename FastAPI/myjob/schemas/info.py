from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, model_validator

from myjob.schemas.common import LocationIn, LocationResponse, reject_explicit_nulls


COMPANY_REQUIRED_FIELDS = (
    "company_name",
    "company_email",
    "company_phone",
    "tax_code",
    "company_image_url",
    "company_cover_image_url",
    "location",
)


class CompanyUpdate(BaseModel):
    company_name: str | None = Field(default=None, min_length=1, max_length=255)
    company_email: EmailStr | None = None
    company_phone: str | None = Field(default=None, min_length=1, max_length=20)
    tax_code: str | None = Field(default=None, min_length=1, max_length=30)
    since: date | None = None
    field_operation: str | None = None
    description: str | None = None
    employee_size: int | None = Field(default=None, ge=0)
    website_url: str | None = None
    facebook_url: str | None = None
    youtube_url: str | None = None
    linkedin_url: str | None = None
    company_image_url: str | None = None
    company_cover_image_url: str | None = None
    location: LocationIn | None = None

    @model_validator(mode="after")
    def required_fields_present(self):
        reject_explicit_nulls(self, COMPANY_REQUIRED_FIELDS)
        return self


class CompanyImageCreate(BaseModel):
    image_url: str = Field(min_length=1, max_length=2000)


class CompanyImageResponse(BaseModel):
    id: int
    image_url: str

    class Config:
        from_attributes = True


class CompanyResponse(BaseModel):
    id: int
    slug: str
    company_name: str
    company_email: str
    company_phone: str
    tax_code: str
    since: date | None = None
    field_operation: str | None = None
    description: str | None = None
    employee_size: int | None = None
    website_url: str | None = None
    facebook_url: str | None = None
    youtube_url: str | None = None
    linkedin_url: str | None = None
    company_image_url: str | None = None
    company_cover_image_url: str | None = None
    location: LocationResponse | None = None
    images: list[CompanyImageResponse] = []
    job_post_count: int = 0
    is_followed: bool | None = None

    class Config:
        from_attributes = True


class CompanyListItem(BaseModel):
    id: int
    slug: str
    company_name: str
    employee_size: int | None = None
    company_image_url: str | None = None
    company_cover_image_url: str | None = None
    field_operation: str | None = None
    city_id: int | None = None


class CompanyListResponse(BaseModel):
    count: int
    results: list[CompanyListItem]


class FollowCompanyResponse(BaseModel):
    is_followed: bool


class JobSeekerProfileUpdate(BaseModel):
    full_name: str | None = Field(default=None, min_length=1, max_length=100)
    avatar_url: str | None = None
    phone: str | None = Field(default=None, max_length=20)
    birthday: date | None = None
    gender: str | None = None
    marital_status: str | None = None


class JobSeekerProfileResponse(BaseModel):
    id: int
    user_id: str
    full_name: str
    email: str
    avatar_url: str | None = None
    phone: str | None = None
    birthday: date | None = None
    gender: str | None = None
    marital_status: str | None = None


class ResumeCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    file_url: str | None = None
    city_id: int | None = None


class ResumeResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    file_url: str | None = None
    city_id: int | None = None
    is_active: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class CandidateResumeResponse(ResumeResponse):
    """A seeker's resume as an employer sees it."""

    user_id: str
    full_name: str
    email: str
    is_saved: bool = False


class SaveResumeResponse(BaseModel):
    is_saved: bool


class SavedResumeItem(BaseModel):
    id: int
    created_at: datetime | None = None
    resume: CandidateResumeResponse


class SavedResumeListResponse(BaseModel):
    count: int
    results: list[SavedResumeItem]


class ResumeViewItem(BaseModel):
    resume_id: int
    resume_title: str
    company_id: int
    company_slug: str
    company_name: str
    company_image_url: str | None = None
    views: int
    updated_at: datetime | None = None


class ResumeViewListResponse(BaseModel):
    count: int
    results: list[ResumeViewItem]
