from datetime import date

from pydantic import BaseModel, EmailStr, Field, field_validator

from myjob.models.user import RoleName
from myjob.schemas.common import LocationIn


def _password_min_length(v: str) -> str:
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters")
    return v


class JobSeekerRegister(BaseModel):
    email: EmailStr
    full_name: str = Field(min_length=1, max_length=100)
    password: str

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        return _password_min_length(v)


class CompanyRegister(BaseModel):
    company_name: str = Field(min_length=1, max_length=255)
    company_email: EmailStr
    company_phone: str = Field(min_length=1, max_length=20)
    tax_code: str = Field(min_length=1, max_length=30)
    since: date | None = None
    field_operation: str | None = None
    employee_size: int | None = Field(default=None, ge=0)
    website_url: str | None = None
    location: LocationIn


class EmployerRegister(BaseModel):
    email: EmailStr
    full_name: str = Field(min_length=1, max_length=100)
    password: str
    company: CompanyRegister

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        return _password_min_length(v)


class AuthCred(BaseModel):
    email: EmailStr
    role_name: RoleName | None = None


class AuthGetToken(BaseModel):
    email: EmailStr
    password: str
    role_name: RoleName | None = None


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class RevokeTokenRequest(BaseModel):
    token: str


class UserResponse(BaseModel):
    id: str
    email: str
    full_name: str
    role_name: str
    is_active: bool = True
    is_verify_email: bool = False
    avatar_url: str | None = None

    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse


class CheckCredsResponse(BaseModel):
    email: str
    email_verified: bool
    exists: bool


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    scope: str = "read write"
    backend: str = "backend"


class JobSeekerProfileSummary(BaseModel):
    id: int
    phone: str | None = None


class CompanySummary(BaseModel):
    id: int
    slug: str
    company_name: str
    company_image_url: str | None = None


class UserInfoResponse(BaseModel):
    id: str
    full_name: str
    email: str
    is_active: bool
    is_verify_email: bool
    avatar_url: str | None = None
    role_name: str
    job_seeker_profile_id: int | None = None
    job_seeker_profile: JobSeekerProfileSummary | None = None
    company_id: int | None = None
    company: CompanySummary | None = None


class UserSettingsResponse(BaseModel):
    email_notification_active: bool = True
    sms_notifications_active: bool = True
