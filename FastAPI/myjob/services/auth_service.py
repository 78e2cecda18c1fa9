import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from myjob.core.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from myjob.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    decode_token,
    verify_password,
)
from myjob.core.slugs import persist_with_unique_slug
from myjob.models.company import Company
from myjob.models.user import RoleName, User
from myjob.repos.common_repo import build_location
from myjob.repos.job_seeker_profile_repo import create as create_profile
from myjob.repos.user_repo import (
    get_by_email,
    get_by_id,
    get_with_relations,
    create as create_user,
)
from myjob.schemas.auth import (
    AuthCred,
    AuthGetToken,
    CheckCredsResponse,
    CompanySummary,
    EmployerRegister,
    JobSeekerProfileSummary,
    JobSeekerRegister,
    TokenResponse,
    UserInfoResponse,
    UserSettingsResponse,
)
from myjob.services.common_service import validate_location

logger = logging.getLogger(__name__)

USER_EXISTS = "User with this email already exists"


def register_job_seeker(db: Session, data: JobSeekerRegister) -> User:
    """Create a JOB_SEEKER user and its empty profile in one commit."""
    if get_by_email(db, data.email):
        raise ConflictError(USER_EXISTS)
    user = create_user(db, data.email, data.password, data.full_name, RoleName.JOB_SEEKER.value, commit=False)
    create_profile(db, user, commit=False)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same email.
        db.rollback()
        raise ConflictError(USER_EXISTS) from e
    db.refresh(user)
    logger.info("Job seeker registered: %s", user.email)
    return user


def register_employer(db: Session, data: EmployerRegister) -> User:
    """Create an EMPLOYER user with its company and company location in one commit."""
    if get_by_email(db, data.email):
        raise ConflictError(USER_EXISTS)
    company_data = data.company
    validate_location(db, company_data.location)

    def build(slug: str) -> User:
        user = create_user(db, data.email, data.password, data.full_name, RoleName.EMPLOYER.value, commit=False)
        loc = company_data.location
        company = Company(
            user=user,
            slug=slug,
            location=build_location(loc.city_id, loc.district_id, loc.address, loc.lat, loc.lng),
            **company_data.model_dump(exclude={"location"}),
        )
        db.add(company)
        return user

    try:
        user = persist_with_unique_slug(db, Company, company_data.company_name, build)
    except IntegrityError as e:
        if get_by_email(db, data.email):
            raise ConflictError(USER_EXISTS) from e
        raise
    logger.info("Employer registered: %s (company %s)", user.email, company_data.company_name)
    return user


def check_credentials(db: Session, data: AuthCred) -> CheckCredsResponse:
    """Tell the client whether to show the login or the register flow. Never raises."""
    user = get_by_email(db, data.email)
    if not user:
        return CheckCredsResponse(email=data.email, email_verified=False, exists=False)
    return CheckCredsResponse(email=data.email, email_verified=bool(user.is_verify_email), exists=True)


def _issue_tokens(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id, user.role_name, user.email),
        refresh_token=create_refresh_token(user.id, user.role_name, user.email),
    )


def get_token(db: Session, data: AuthGetToken) -> TokenResponse:
    user = get_by_email(db, data.email)
    if (
        not user
        or not verify_password(data.password, user.password_hash)
        or (data.role_name is not None and user.role_name != data.role_name.value)
    ):
        raise NotFoundError("User not found!")
    if not user.is_active:
        raise ForbiddenError("Account is disabled")
    logger.info("Token issued for %s", user.email)
    return _issue_tokens(user)


def refresh_tokens(db: Session, refresh_token: str) -> TokenResponse:
    payload = decode_refresh_token(refresh_token)
    if not payload:
        raise UnauthorizedError("Invalid or expired refresh token")
    user = get_by_id(db, payload.get("sub"))
    if not user or not user.is_active:
        raise UnauthorizedError("Invalid or expired refresh token")
    logger.info("Token refreshed for %s", user.email)
    return _issue_tokens(user)


def revoke_token(token: str) -> bool:
    """
    Validate and log a revocation request. Tokens are stateless and no
    revocation list is kept, so the token stays usable until it expires.
    """
    payload = decode_token(token)
    if not payload:
        raise BadRequestError("Invalid token")
    logger.info("Token revoke requested for user %s", payload.get("sub"))
    return True


def get_user_info(db: Session, email: str) -> UserInfoResponse:
    user = get_with_relations(db, email)
    if not user:
        raise NotFoundError("User not found")
    profile = user.job_seeker_profile
    company = user.company if user.role_name == RoleName.EMPLOYER.value else None
    return UserInfoResponse(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        is_active=user.is_active,
        is_verify_email=user.is_verify_email,
        avatar_url=user.avatar_url,
        role_name=user.role_name,
        job_seeker_profile_id=profile.id if profile else None,
        job_seeker_profile=JobSeekerProfileSummary(id=profile.id, phone=profile.phone) if profile else None,
        company_id=company.id if company else None,
        company=CompanySummary(
            id=company.id,
            slug=company.slug,
            company_name=company.company_name,
            company_image_url=company.company_image_url,
        ) if company else None,
    )


def get_user_settings() -> UserSettingsResponse:
    return UserSettingsResponse(email_notification_active=True, sms_notifications_active=True)
