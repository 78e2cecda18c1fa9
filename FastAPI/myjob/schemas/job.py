from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, model_validator

from myjob.schemas.common import LocationIn, LocationResponse, reject_explicit_nulls


# Non-nullable job post columns a partial update may not clear.
JOB_POST_REQUIRED_FIELDS = ("job_name", "deadline", "quantity", "career_id", "location", "is_hot", "is_urgent")


class JobPostCreate(BaseModel):
    job_name: str = Field(min_length=1, max_length=255)
    deadline: date
    career_id: int
    location: LocationIn
    quantity: int = Field(default=1, ge=1)
    gender_required: str | None = None
    job_description: str | None = None
    job_requirement: str | None = None
    benefits_enjoyed: str | None = None
    position: int | None = None
    type_of_workplace: int | None = None
    experience: int | None = None
    academic_level: int | None = None
    job_type: int | None = None
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    is_hot: bool = False
    is_urgent: bool = False
    contact_person_name: str | None = None
    contact_person_phone: str | None = None
    contact_person_email: EmailStr | None = None

    @model_validator(mode="after")
    def salary_range_valid(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min must not exceed salary_max")
        return self


class JobPostUpdate(BaseModel):
    job_name: str | None = Field(default=None, min_length=1, max_length=255)
    deadline: date | None = None
    career_id: int | None = None
    location: LocationIn | None = None
    quantity: int | None = Field(default=None, ge=1)
    gender_required: str | None = None
    job_description: str | None = None
    job_requirement: str | None = None
    benefits_enjoyed: str | None = None
    position: int | None = None
    type_of_workplace: int | None = None
    experience: int | None = None
    academic_level: int | None = None
    job_type: int | None = None
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    is_hot: bool | None = None
    is_urgent: bool | None = None
    contact_person_name: str | None = None
    contact_person_phone: str | None = None
    contact_person_email: EmailStr | None = None

    @model_validator(mode="after")
    def required_fields_and_salary_range(self):
        reject_explicit_nulls(self, JOB_POST_REQUIRED_FIELDS)
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min must not exceed salary_max")
        return self


class JobPostCompany(BaseModel):
    id: int
    slug: str
    company_name: str
    employee_size: int | None = None
    company_image_url: str | None = None

    class Config:
        from_attributes = True


class JobPostResponse(BaseModel):
    id: int
    slug: str
    job_name: str
    deadline: date
    quantity: int
    gender_required: str | None = None
    job_description: str | None = None
    job_requirement: str | None = None
    benefits_enjoyed: str | None = None
    career_id: int
    position: int | None = None
    type_of_workplace: int | None = None
    experience: int | None = None
    academic_level: int | None = None
    job_type: int | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    is_hot: bool
    is_urgent: bool
    contact_person_name: str | None = None
    contact_person_phone: str | None = None
    contact_person_email: str | None = None
    views: int
    status: int
    location: LocationResponse | None = None
    company: JobPostCompany | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_saved: bool | None = None

    class Config:
        from_attributes = True


class CompanyDict(BaseModel):
    id: int
    slug: str
    company_name: str
    employee_size: int | None = None
    company_image_url: str | None = None


class LocationDict(BaseModel):
    city: int | None = None


class JobPostListItem(BaseModel):
    id: int
    slug: str
    job_name: str
    deadline: date
    salary_min: int | None = None
    salary_max: int | None = None
    is_hot: bool
    is_urgent: bool
    company_dict: CompanyDict | None = None
    location_dict: LocationDict | None = None


class JobPostListResponse(BaseModel):
    count: int
    results: list[JobPostListItem]


class PrivateJobPostItem(BaseModel):
    id: int
    slug: str
    job_name: str
    deadline: date
    is_urgent: bool
    status: int
    created_at: datetime | None = None
    applied_number: int = 0
    views: int
    is_expired: bool


class PrivateJobPostListResponse(BaseModel):
    count: int
    results: list[PrivateJobPostItem]


class JobPostExportRow(BaseModel):
    no: int
    job_id: int
    job_name: str
    deadline: date
    posted_at: datetime | None = None
    applied_number: int = 0
    views: int


class JobPostExportResponse(BaseModel):
    data: list[JobPostExportRow]


class SavedJobPostResponse(BaseModel):
    is_saved: bool


class SavedJobPostListResponse(BaseModel):
    count: int
    results: list[JobPostListItem]


class JobPostActivityCreate(BaseModel):
    job_post_id: int
    resume_id: int
    full_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=20)


class JobPostActivityResponse(BaseModel):
    id: int
    job_post_id: int
    resume_id: int
    full_name: str
    email: str
    phone: str
    created_at: datetime | None = None
    job_name: str | None = None
    job_post_slug: str | None = None
    company_name: str | None = None
    resume_title: str | None = None


class JobPostActivityListResponse(BaseModel):
    count: int
    results: list[JobPostActivityResponse]


class JobPostNotificationCreate(BaseModel):
    job_name: str = Field(min_length=1, max_length=255)
    career_id: int
    city_id: int
    position: int | None = None
    experience: int | None = None
    salary: int | None = Field(default=None, ge=0)
    frequency: int = Field(default=7, ge=1)


class JobPostNotificationUpdate(BaseModel):
    job_name: str | None = Field(default=None, min_length=1, max_length=255)
    career_id: int | None = None
    city_id: int | None = None
    position: int | None = None
    experience: int | None = None
    salary: int | None = Field(default=None, ge=0)
    frequency: int | None = Field(default=None, ge=1)


class JobPostNotificationResponse(BaseModel):
    id: int
    job_name: str
    career_id: int
    city_id: int
    position: int | None = None
    experience: int | None = None
    salary: int | None = None
    frequency: int
    is_active: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class JobPostNotificationListResponse(BaseModel):
    count: int
    results: list[JobPostNotificationResponse]
