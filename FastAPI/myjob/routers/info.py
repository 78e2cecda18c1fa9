import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from myjob.core.errors import AppError
from myjob.database import get_db
from myjob.dependencies import (
    get_current_employer,
    get_current_job_seeker,
    get_current_user,
    get_optional_user_id,
)
from myjob.models.user import User
from myjob.schemas.info import (
    CandidateResumeResponse,
    CompanyImageCreate,
    CompanyImageResponse,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
    FollowCompanyResponse,
    JobSeekerProfileResponse,
    JobSeekerProfileUpdate,
    ResumeCreate,
    ResumeResponse,
    ResumeViewListResponse,
    SaveResumeResponse,
    SavedResumeListResponse,
)
from myjob.services.info_service import (
    add_company_image,
    create_resume,
    delete_company_image,
    delete_resume,
    get_company,
    get_job_seeker_profile,
    get_public_company,
    get_resume,
    get_resume_views,
    get_saved_resumes,
    list_companies,
    list_resumes,
    toggle_follow_company,
    toggle_save_resume,
    update_company,
    update_job_seeker_profile,
    view_candidate_resume,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/info", tags=["info"])


# --- Company (employer's own) ---

@router.get("/company", response_model=CompanyResponse)
def my_company(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    return get_company(db, user.id)


@router.put("/company", response_model=CompanyResponse)
def edit_company(
    data: CompanyUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    try:
        return update_company(db, user.id, data)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Company update failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update company") from e


@router.post("/company/images", response_model=CompanyImageResponse, status_code=status.HTTP_201_CREATED)
def upload_company_image(
    data: CompanyImageCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    return add_company_image(db, user.id, data.image_url)


@router.delete("/company/images/{image_id}")
def remove_company_image(
    image_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    delete_company_image(db, user.id, image_id)
    return {"deleted": True}


# --- Public companies ---

@router.get("/companies", response_model=CompanyListResponse)
def companies(
    kw: str | None = None,
    city_id: int | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    return list_companies(db, keyword=kw, city_id=city_id, page=page, page_size=page_size)


@router.get("/companies/{slug}", response_model=CompanyResponse)
def company_detail(
    slug: str,
    db: Session = Depends(get_db),
    user_id: str | None = Depends(get_optional_user_id),
):
    return get_public_company(db, slug, user_id)


@router.post("/companies/{slug}/follow", response_model=FollowCompanyResponse)
def follow_company(
    slug: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    is_followed = toggle_follow_company(db, slug, user.id)
    return FollowCompanyResponse(is_followed=is_followed)


# --- Job seeker profile ---

@router.get("/job-seeker-profile", response_model=JobSeekerProfileResponse)
def my_profile(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    return get_job_seeker_profile(db, user.id)


@router.put("/job-seeker-profile", response_model=JobSeekerProfileResponse)
def edit_profile(
    data: JobSeekerProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    try:
        return update_job_seeker_profile(db, user.id, data)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Profile update failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update profile") from e


# --- Resumes ---

@router.get("/resumes", response_model=list[ResumeResponse])
def resumes(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    return list_resumes(db, user.id)


@router.post("/resumes", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
def add_resume(
    data: ResumeCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    return create_resume(db, user.id, data)


@router.get("/resumes/{resume_id}", response_model=ResumeResponse)
def resume_detail(
    resume_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    return get_resume(db, resume_id, user.id)


@router.delete("/resumes/{resume_id}")
def remove_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    delete_resume(db, resume_id, user.id)
    return {"deleted": True}


@router.get("/job-seeker/resume-views", response_model=ResumeViewListResponse)
def resume_views(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    return get_resume_views(db, user.id, page=page, page_size=page_size)


# --- Candidate resumes (employer) ---

@router.get("/employer/resumes/{resume_id}", response_model=CandidateResumeResponse)
def candidate_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    return view_candidate_resume(db, user.id, resume_id)


@router.post("/employer/resumes/{resume_id}/save", response_model=SaveResumeResponse)
def save_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    is_saved = toggle_save_resume(db, user.id, resume_id)
    return SaveResumeResponse(is_saved=is_saved)


@router.get("/employer/saved-resumes", response_model=SavedResumeListResponse)
def saved_resumes(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    return get_saved_resumes(db, user.id, page=page, page_size=page_size)
