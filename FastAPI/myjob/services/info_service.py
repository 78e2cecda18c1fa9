import logging

from sqlalchemy.orm import Session

from myjob.core.errors import NotFoundError
from myjob.core.pagination import normalize_page, page_offset
from myjob.core.slugs import persist_with_unique_slug
from myjob.models.company import Company
from myjob.models.company_image import CompanyImage
from myjob.models.resume import Resume
from myjob.repos import company_repo, resume_repo
from myjob.repos.common_repo import build_location, update_location
from myjob.repos.job_seeker_profile_repo import (
    create as create_profile,
    get_by_user_id as get_profile,
    update as update_profile,
)
from myjob.repos.user_repo import get_by_id as get_user, update as update_user
from myjob.schemas.info import (
    CandidateResumeResponse,
    CompanyListItem,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
    JobSeekerProfileResponse,
    JobSeekerProfileUpdate,
    ResumeCreate,
    ResumeViewItem,
    ResumeViewListResponse,
    SavedResumeItem,
    SavedResumeListResponse,
)
from myjob.services.common_service import require_city, validate_location

logger = logging.getLogger(__name__)


# --- Company ---

def _require_own_company(db: Session, user_id: str) -> Company:
    company = company_repo.get_by_user_id(db, user_id)
    if not company:
        raise NotFoundError("Company not found")
    return company


def _to_company_response(db: Session, company: Company, is_followed: bool | None = None) -> CompanyResponse:
    response = CompanyResponse.model_validate(company)
    response.job_post_count = company_repo.count_job_posts(db, company.id)
    response.is_followed = is_followed
    return response


def get_company(db: Session, user_id: str) -> CompanyResponse:
    """The employer's own company."""
    return _to_company_response(db, _require_own_company(db, user_id))


def update_company(db: Session, user_id: str, data: CompanyUpdate) -> CompanyResponse:
    company = _require_own_company(db, user_id)
    if data.location is not None:
        validate_location(db, data.location)
    changes = data.model_dump(exclude_unset=True, exclude={"location"})
    rename = "company_name" in changes and changes["company_name"] != company.company_name

    def apply(slug: str | None = None) -> Company:
        for name, value in changes.items():
            setattr(company, name, value)
        if data.location is not None:
            loc = data.location
            if company.location is None:
                company.location = build_location(loc.city_id, loc.district_id, loc.address, loc.lat, loc.lng)
            else:
                update_location(company.location, loc.city_id, loc.district_id, loc.address, loc.lat, loc.lng)
        if slug is not None:
            company.slug = slug
        return company

    if rename:
        company = persist_with_unique_slug(db, Company, changes["company_name"], apply, exclude_id=company.id)
    else:
        apply()
        db.commit()
        db.refresh(company)
    logger.info("Company updated: id=%s slug=%s", company.id, company.slug)
    return _to_company_response(db, company)


def list_companies(
    db: Session,
    keyword: str | None = None,
    city_id: int | None = None,
    page: int = 1,
    page_size: int | None = None,
) -> CompanyListResponse:
    page, page_size = normalize_page(page, page_size)
    items, total = company_repo.get_paginated(
        db, keyword=keyword, city_id=city_id, limit=page_size, offset=page_offset(page, page_size)
    )
    results = [
        CompanyListItem(
            id=c.id,
            slug=c.slug,
            company_name=c.company_name,
            employee_size=c.employee_size,
            company_image_url=c.company_image_url,
            company_cover_image_url=c.company_cover_image_url,
            field_operation=c.field_operation,
            city_id=c.location.city_id if c.location else None,
        )
        for c in items
    ]
    return CompanyListResponse(count=total, results=results)


def get_public_company(db: Session, slug: str, user_id: str | None = None) -> CompanyResponse:
    company = company_repo.get_by_slug(db, slug)
    if not company:
        raise NotFoundError("Company not found")
    is_followed = None
    if user_id is not None:
        is_followed = company_repo.get_follow(db, user_id, company.id) is not None
    return _to_company_response(db, company, is_followed=is_followed)


def toggle_follow_company(db: Session, slug: str, user_id: str) -> bool:
    company = company_repo.get_by_slug(db, slug)
    if not company:
        raise NotFoundError("Company not found")
    followed = company_repo.get_follow(db, user_id, company.id)
    if followed:
        company_repo.unfollow(db, followed)
        logger.info("Company %s unfollowed by %s", company.id, user_id)
        return False
    company_repo.follow(db, user_id, company.id)
    logger.info("Company %s followed by %s", company.id, user_id)
    return True


def add_company_image(db: Session, user_id: str, image_url: str) -> CompanyImage:
    company = _require_own_company(db, user_id)
    return company_repo.add_image(db, company, image_url)


def delete_company_image(db: Session, user_id: str, image_id: int) -> None:
    company = _require_own_company(db, user_id)
    if not company_repo.delete_image(db, company.id, image_id):
        raise NotFoundError("Company image not found")


# --- Job seeker profile ---

def _to_profile_response(profile, user) -> JobSeekerProfileResponse:
    return JobSeekerProfileResponse(
        id=profile.id,
        user_id=user.id,
        full_name=user.full_name,
        email=user.email,
        avatar_url=user.avatar_url,
        phone=profile.phone,
        birthday=profile.birthday,
        gender=profile.gender,
        marital_status=profile.marital_status,
    )


def get_job_seeker_profile(db: Session, user_id: str) -> JobSeekerProfileResponse:
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    profile = get_profile(db, user_id)
    if not profile:
        # Seekers created before profiles were provisioned at registration.
        profile = create_profile(db, user)
    return _to_profile_response(profile, user)


def update_job_seeker_profile(db: Session, user_id: str, data: JobSeekerProfileUpdate) -> JobSeekerProfileResponse:
    user = update_user(db, user_id, full_name=data.full_name, avatar_url=data.avatar_url, commit=False)
    if not user:
        raise NotFoundError("User not found")
    profile = get_profile(db, user_id) or create_profile(db, user, commit=False)
    profile = update_profile(
        db,
        profile,
        phone=data.phone,
        birthday=data.birthday,
        gender=data.gender,
        marital_status=data.marital_status,
    )
    db.refresh(user)
    logger.info("Job seeker profile updated for %s", user_id)
    return _to_profile_response(profile, user)


# --- Resumes ---

def create_resume(db: Session, user_id: str, data: ResumeCreate) -> Resume:
    if data.city_id is not None:
        require_city(db, data.city_id)
    resume = resume_repo.create(
        db,
        user_id=user_id,
        title=data.title,
        description=data.description,
        file_url=data.file_url,
        city_id=data.city_id,
    )
    logger.info("Resume %s created for %s", resume.id, user_id)
    return resume


def list_resumes(db: Session, user_id: str) -> list[Resume]:
    return resume_repo.get_all_by_user(db, user_id)


def get_resume(db: Session, resume_id: int, user_id: str) -> Resume:
    resume = resume_repo.get_by_id(db, resume_id, user_id)
    if not resume:
        raise NotFoundError("Resume not found")
    return resume


def delete_resume(db: Session, resume_id: int, user_id: str) -> None:
    if not resume_repo.delete(db, resume_id, user_id):
        raise NotFoundError("Resume not found")


# --- Candidate resumes (employer side) ---

def _require_candidate_resume(db: Session, resume_id: int) -> Resume:
    resume = resume_repo.get_active(db, resume_id)
    if not resume:
        raise NotFoundError("Resume not found")
    return resume


def _to_candidate(resume: Resume, is_saved: bool) -> CandidateResumeResponse:
    return CandidateResumeResponse(
        id=resume.id,
        title=resume.title,
        description=resume.description,
        file_url=resume.file_url,
        city_id=resume.city_id,
        is_active=resume.is_active,
        created_at=resume.created_at,
        user_id=resume.user.id,
        full_name=resume.user.full_name,
        email=resume.user.email,
        is_saved=is_saved,
    )


def view_candidate_resume(db: Session, user_id: str, resume_id: int) -> CandidateResumeResponse:
    """Open a seeker's resume and count the view against the employer's company."""
    company = _require_own_company(db, user_id)
    resume = _require_candidate_resume(db, resume_id)
    resume_repo.record_view(db, resume.id, company.id)
    logger.info("Resume %s viewed by company %s", resume.id, company.id)
    is_saved = resume_repo.get_saved(db, resume.id, company.id) is not None
    return _to_candidate(resume, is_saved)


def toggle_save_resume(db: Session, user_id: str, resume_id: int) -> bool:
    company = _require_own_company(db, user_id)
    resume = _require_candidate_resume(db, resume_id)
    saved = resume_repo.get_saved(db, resume.id, company.id)
    if saved:
        resume_repo.unsave(db, saved)
        logger.info("Resume %s unsaved by company %s", resume.id, company.id)
        return False
    # A concurrent insert of the same pair still leaves it saved.
    resume_repo.save(db, resume.id, company.id)
    logger.info("Resume %s saved by company %s", resume.id, company.id)
    return True


def get_saved_resumes(
    db: Session,
    user_id: str,
    page: int = 1,
    page_size: int | None = None,
) -> SavedResumeListResponse:
    company = _require_own_company(db, user_id)
    page, page_size = normalize_page(page, page_size)
    items, total = resume_repo.get_saved_for_company(
        db, company.id, limit=page_size, offset=page_offset(page, page_size)
    )
    results = [
        SavedResumeItem(id=s.id, created_at=s.created_at, resume=_to_candidate(s.resume, True))
        for s in items
    ]
    return SavedResumeListResponse(count=total, results=results)


def get_resume_views(
    db: Session,
    user_id: str,
    page: int = 1,
    page_size: int | None = None,
) -> ResumeViewListResponse:
    """Which companies looked at the seeker's resumes."""
    page, page_size = normalize_page(page, page_size)
    items, total = resume_repo.get_views_for_user(db, user_id, limit=page_size, offset=page_offset(page, page_size))
    results = [
        ResumeViewItem(
            resume_id=v.resume_id,
            resume_title=v.resume.title,
            company_id=v.company_id,
            company_slug=v.company.slug,
            company_name=v.company.company_name,
            company_image_url=v.company.company_image_url,
            views=v.views,
            updated_at=v.updated_at,
        )
        for v in items
    ]
    return ResumeViewListResponse(count=total, results=results)
