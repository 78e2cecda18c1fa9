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
from myjob.schemas.job import (
    JobPostActivityCreate,
    JobPostActivityListResponse,
    JobPostActivityResponse,
    JobPostCreate,
    JobPostExportResponse,
    JobPostListResponse,
    JobPostNotificationCreate,
    JobPostNotificationListResponse,
    JobPostNotificationResponse,
    JobPostNotificationUpdate,
    JobPostResponse,
    JobPostUpdate,
    PrivateJobPostListResponse,
    SavedJobPostListResponse,
    SavedJobPostResponse,
)
from myjob.services.job_service import (
    create_job_post_activity,
    create_job_post_notification,
    create_private_job_post,
    delete_job_post_notification,
    delete_private_job_post,
    find_job_posts,
    find_private_job_posts,
    find_private_job_posts_to_export,
    get_employer_job_post_activities,
    get_job_post_activities,
    get_job_post_notifications,
    get_private_job_post,
    get_public_job_post,
    get_saved_job_posts,
    toggle_job_post_notification_active,
    toggle_saved_job_post,
    update_job_post_notification,
    update_private_job_post,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


# --- Public job posts ---

@router.get("/job-posts", response_model=JobPostListResponse)
def list_job_posts(
    kw: str | None = None,
    is_urgent: bool | None = None,
    career_id: int | None = None,
    company_id: int | None = None,
    city_id: int | None = None,
    status_id: int | None = None,
    ordering: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    """Published, unexpired job posts. Unknown ordering keys are rejected with 400."""
    return find_job_posts(
        db,
        keyword=kw,
        is_urgent=is_urgent,
        career_id=career_id,
        company_id=company_id,
        city_id=city_id,
        status_id=status_id,
        ordering=ordering,
        page=page,
        page_size=page_size,
    )


@router.get("/job-posts/{slug}", response_model=JobPostResponse)
def job_post_detail(
    slug: str,
    db: Session = Depends(get_db),
    user_id: str | None = Depends(get_optional_user_id),
):
    """Job post by slug; each call counts one view. is_saved is null for anonymous callers."""
    return get_public_job_post(db, slug, user_id)


@router.post("/job-posts/{slug}/save", response_model=SavedJobPostResponse)
def save_job_post(
    slug: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    is_saved = toggle_saved_job_post(db, slug, user.id)
    return SavedJobPostResponse(is_saved=is_saved)


# --- Job seeker ---

@router.get("/job-seeker/saved-job-posts", response_model=SavedJobPostListResponse)
def saved_job_posts(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    return get_saved_job_posts(db, user.id, page=page, page_size=page_size)


@router.get("/job-seeker/job-posts-activity", response_model=JobPostActivityListResponse)
def my_job_post_activities(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    return get_job_post_activities(db, user.id, page=page, page_size=page_size)


@router.post(
    "/job-seeker/job-posts-activity",
    response_model=JobPostActivityResponse,
    status_code=status.HTTP_201_CREATED,
)
def apply_job_post(
    data: JobPostActivityCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_job_seeker),
):
    try:
        return create_job_post_activity(db, user.id, data)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Application failed for user=%s job_post=%s: %s", user.id, data.job_post_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to apply") from e


# --- Employer ---

@router.get("/employer/job-posts-activity", response_model=JobPostActivityListResponse)
def received_job_post_activities(
    job_post_id: int | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    return get_employer_job_post_activities(db, user.id, page=page, page_size=page_size, job_post_id=job_post_id)


@router.get("/private/job-posts", response_model=PrivateJobPostListResponse)
def list_private_job_posts(
    kw: str | None = None,
    is_urgent: bool | None = None,
    status_id: int | None = None,
    ordering: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    return find_private_job_posts(
        db,
        user.id,
        keyword=kw,
        is_urgent=is_urgent,
        status_id=status_id,
        ordering=ordering,
        page=page,
        page_size=page_size,
    )


@router.post("/private/job-posts", response_model=JobPostResponse, status_code=status.HTTP_201_CREATED)
def create_job_post(
    data: JobPostCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    try:
        return create_private_job_post(db, user.email, data)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Job post create failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create job post") from e


@router.get("/private/job-posts/export", response_model=JobPostExportResponse)
def export_private_job_posts(
    kw: str | None = None,
    is_urgent: bool | None = None,
    status_id: int | None = None,
    ordering: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    rows = find_private_job_posts_to_export(
        db,
        user.id,
        keyword=kw,
        is_urgent=is_urgent,
        status_id=status_id,
        ordering=ordering,
        page=page,
        page_size=page_size,
    )
    return JobPostExportResponse(data=rows)


@router.get("/private/job-posts/{job_id}", response_model=JobPostResponse)
def private_job_post_detail(
    job_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    return get_private_job_post(db, job_id, user.id)


@router.put("/private/job-posts/{job_id}", response_model=JobPostResponse)
def update_job_post(
    job_id: int,
    data: JobPostUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    try:
        return update_private_job_post(db, job_id, user.id, data)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Job post update failed for user=%s job=%s: %s", user.id, job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update job post") from e


@router.delete("/private/job-posts/{job_id}")
def delete_job_post(
    job_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_employer),
):
    delete_private_job_post(db, job_id, user.id)
    return {"deleted": True}


# --- Notification subscriptions ---

@router.get("/job-post-notifications", response_model=JobPostNotificationListResponse)
def list_notifications(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_job_post_notifications(db, user.id, page=page, page_size=page_size)


@router.post(
    "/job-post-notifications",
    response_model=JobPostNotificationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_notification(
    data: JobPostNotificationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return create_job_post_notification(db, user.id, data)


@router.put("/job-post-notifications/{notification_id}", response_model=JobPostNotificationResponse)
def update_notification(
    notification_id: int,
    data: JobPostNotificationUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return update_job_post_notification(db, notification_id, user.id, data)


@router.put("/job-post-notifications/{notification_id}/active")
def toggle_notification_active(
    notification_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    is_active = toggle_job_post_notification_active(db, notification_id, user.id)
    return {"is_active": is_active}


@router.delete("/job-post-notifications/{notification_id}")
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    delete_job_post_notification(db, notification_id, user.id)
    return {"deleted": True}
