import logging
from datetime import date, datetime, timezone

from sqlalchemy.orm import Session

from myjob.core.errors import BadRequestError, ConflictError, NotFoundError
from myjob.core.pagination import normalize_page, page_offset
from myjob.core.slugs import persist_with_unique_slug
from myjob.config import settings
from myjob.models.job_post import JobPost
from myjob.models.job_post_activity import JobPostActivity
from myjob.models.job_post_notification import JobPostNotification
from myjob.models.user import RoleName, User
from myjob.repos.common_repo import build_location, update_location
from myjob.repos.job_post_repo import (
    DEFAULT_ORDERING,
    ORDERABLE_COLUMNS,
    count_applications,
    delete as delete_job_post,
    get_by_id as get_job_post_by_id,
    get_by_slug as get_job_post_by_slug,
    get_owned as get_owned_job_post,
    increment_views,
    search_owned,
    search_published,
)
from myjob.repos.job_post_saved_repo import (
    create as create_saved,
    delete as delete_saved,
    get as get_saved,
    get_active_for_user,
)
from myjob.repos import job_post_activity_repo, job_post_notification_repo
from myjob.repos.resume_repo import get_by_id as get_resume
from myjob.repos.user_repo import get_with_relations
from myjob.schemas.job import (
    CompanyDict,
    JobPostActivityCreate,
    JobPostActivityListResponse,
    JobPostActivityResponse,
    JobPostCreate,
    JobPostExportRow,
    JobPostListItem,
    JobPostListResponse,
    JobPostNotificationCreate,
    JobPostNotificationListResponse,
    JobPostNotificationResponse,
    JobPostNotificationUpdate,
    JobPostResponse,
    JobPostUpdate,
    LocationDict,
    PrivateJobPostItem,
    PrivateJobPostListResponse,
    SavedJobPostListResponse,
)
from myjob.services.common_service import require_career, require_city, validate_location

logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(timezone.utc).date()


def resolve_ordering(ordering: str | None) -> str:
    """Map a client ordering key onto the allow-list; unknown keys are rejected."""
    key = (ordering or DEFAULT_ORDERING).strip().lstrip("-")
    if key not in ORDERABLE_COLUMNS:
        raise BadRequestError(
            f"Invalid ordering '{ordering}'. Allowed: {', '.join(sorted(ORDERABLE_COLUMNS))}"
        )
    return key


def _to_list_item(job_post: JobPost) -> JobPostListItem:
    company = job_post.company
    location = job_post.location
    return JobPostListItem(
        id=job_post.id,
        slug=job_post.slug,
        job_name=job_post.job_name,
        deadline=job_post.deadline,
        salary_min=job_post.salary_min,
        salary_max=job_post.salary_max,
        is_hot=job_post.is_hot,
        is_urgent=job_post.is_urgent,
        company_dict=CompanyDict(
            id=company.id,
            slug=company.slug,
            company_name=company.company_name,
            employee_size=company.employee_size,
            company_image_url=company.company_image_url,
        ) if company else None,
        location_dict=LocationDict(city=location.city_id) if location else None,
    )


# ---------------------------------------------------------------------------
# Public listing
# ---------------------------------------------------------------------------

def find_job_posts(
    db: Session,
    *,
    keyword: str | None = None,
    is_urgent: bool | None = None,
    career_id: int | None = None,
    company_id: int | None = None,
    city_id: int | None = None,
    status_id: int | None = None,
    ordering: str | None = None,
    page: int = 1,
    page_size: int | None = None,
) -> JobPostListResponse:
    """
    Published job posts whose deadline has not passed. Extra filters narrow the
    result further; they never widen it past published posts.
    """
    ordering = resolve_ordering(ordering)
    page, page_size = normalize_page(page, page_size)
    items, total = search_published(
        db,
        today=_today(),
        ordering=ordering,
        keyword=keyword,
        is_urgent=is_urgent,
        career_id=career_id,
        company_id=company_id,
        city_id=city_id,
        status_id=status_id,
        limit=page_size,
        offset=page_offset(page, page_size),
    )
    return JobPostListResponse(count=total, results=[_to_list_item(j) for j in items])


# ---------------------------------------------------------------------------
# Employer (private) job posts
# ---------------------------------------------------------------------------

def find_employer(db: Session, email: str) -> User:
    """Employer user with a company, or NotFound / Conflict."""
    user = get_with_relations(db, email)
    if not user or not user.company:
        raise NotFoundError("Employer company not found")
    if user.role_name != RoleName.EMPLOYER.value:
        raise ConflictError("Only employers can manage job posts")
    return user


def _search_owned_page(db, user_id, keyword, is_urgent, status_id, ordering, page, page_size):
    ordering = resolve_ordering(ordering)
    page, page_size = normalize_page(page, page_size)
    items, total = search_owned(
        db,
        user_id,
        ordering=ordering,
        keyword=keyword,
        is_urgent=is_urgent,
        status_id=status_id,
        limit=page_size,
        offset=page_offset(page, page_size),
    )
    return items, total, page, page_size


def find_private_job_posts(
    db: Session,
    user_id: str,
    *,
    keyword: str | None = None,
    is_urgent: bool | None = None,
    status_id: int | None = None,
    ordering: str | None = None,
    page: int = 1,
    page_size: int | None = None,
) -> PrivateJobPostListResponse:
    items, total, _, _ = _search_owned_page(db, user_id, keyword, is_urgent, status_id, ordering, page, page_size)
    applied = count_applications(db, [j.id for j in items])
    today = _today()
    results = [
        PrivateJobPostItem(
            id=j.id,
            slug=j.slug,
            job_name=j.job_name,
            deadline=j.deadline,
            is_urgent=j.is_urgent,
            status=j.status,
            created_at=j.created_at,
            applied_number=applied.get(j.id, 0),
            views=j.views,
            is_expired=j.deadline < today,
        )
        for j in items
    ]
    return PrivateJobPostListResponse(count=total, results=results)


def find_private_job_posts_to_export(
    db: Session,
    user_id: str,
    *,
    keyword: str | None = None,
    is_urgent: bool | None = None,
    status_id: int | None = None,
    ordering: str | None = None,
    page: int = 1,
    page_size: int | None = None,
) -> list[JobPostExportRow]:
    items, _, page, page_size = _search_owned_page(
        db, user_id, keyword, is_urgent, status_id, ordering, page, page_size
    )
    applied = count_applications(db, [j.id for j in items])
    start = page_offset(page, page_size)
    return [
        JobPostExportRow(
            no=start + index,
            job_id=j.id,
            job_name=j.job_name,
            deadline=j.deadline,
            posted_at=j.created_at,
            applied_number=applied.get(j.id, 0),
            views=j.views,
        )
        for index, j in enumerate(items, start=1)
    ]


def get_private_job_post(db: Session, job_id: int, user_id: str) -> JobPost:
    job_post = get_owned_job_post(db, job_id, user_id)
    if not job_post:
        raise NotFoundError("Job post not found")
    return job_post


def create_private_job_post(db: Session, email: str, data: JobPostCreate) -> JobPost:
    user = find_employer(db, email)
    require_career(db, data.career_id)
    validate_location(db, data.location)
    company_id = user.company.id
    user_id = user.id

    def build(slug: str) -> JobPost:
        loc = data.location
        job_post = JobPost(
            slug=slug,
            company_id=company_id,
            user_id=user_id,
            status=settings.job_post_default_status,
            location=build_location(loc.city_id, loc.district_id, loc.address, loc.lat, loc.lng),
            **data.model_dump(exclude={"location"}),
        )
        db.add(job_post)
        return job_post

    job_post = persist_with_unique_slug(db, JobPost, data.job_name, build)
    logger.info("Job post created: id=%s slug=%s by %s", job_post.id, job_post.slug, email)
    return job_post


def update_private_job_post(db: Session, job_id: int, user_id: str, data: JobPostUpdate) -> JobPost:
    job_post = get_private_job_post(db, job_id, user_id)
    if data.career_id is not None:
        require_career(db, data.career_id)
    if data.location is not None:
        validate_location(db, data.location)
    changes = data.model_dump(exclude_unset=True, exclude={"location"})
    salary_min = changes.get("salary_min", job_post.salary_min)
    salary_max = changes.get("salary_max", job_post.salary_max)
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise BadRequestError("salary_min must not exceed salary_max")
    rename = "job_name" in changes and changes["job_name"] != job_post.job_name

    def apply(slug: str | None = None) -> JobPost:
        # Re-run after a rollback, which discards changes made to the loaded row.
        for name, value in changes.items():
            setattr(job_post, name, value)
        if data.location is not None:
            loc = data.location
            update_location(job_post.location, loc.city_id, loc.district_id, loc.address, loc.lat, loc.lng)
        if slug is not None:
            job_post.slug = slug
        return job_post

    if rename:
        job_post = persist_with_unique_slug(db, JobPost, changes["job_name"], apply, exclude_id=job_post.id)
    else:
        apply()
        db.commit()
        db.refresh(job_post)
    logger.info("Job post updated: id=%s slug=%s", job_post.id, job_post.slug)
    return job_post


def delete_private_job_post(db: Session, job_id: int, user_id: str) -> None:
    job_post = get_private_job_post(db, job_id, user_id)
    delete_job_post(db, job_post)
    logger.info("Job post deleted: id=%s", job_id)


# ---------------------------------------------------------------------------
# Public detail and saved posts
# ---------------------------------------------------------------------------

def get_public_job_post(db: Session, slug: str, user_id: str | None = None) -> JobPostResponse:
    job_post = get_job_post_by_slug(db, slug)
    if not job_post:
        raise NotFoundError("Job post not found")
    increment_views(db, job_post.id)
    db.refresh(job_post)
    response = JobPostResponse.model_validate(job_post)
    if user_id is not None:
        response.is_saved = get_saved(db, user_id, job_post.id) is not None
    return response


def toggle_saved_job_post(db: Session, slug: str, user_id: str) -> bool:
    """Flip the saved state of a job post for the user and return the new state."""
    job_post = get_job_post_by_slug(db, slug)
    if not job_post:
        raise NotFoundError("Job post not found")
    saved = get_saved(db, user_id, job_post.id)
    if saved:
        delete_saved(db, saved)
        logger.info("Job post %s unsaved by %s", job_post.id, user_id)
        return False
    # False here means a concurrent request inserted the same pair; it is saved either way.
    create_saved(db, user_id, job_post.id)
    logger.info("Job post %s saved by %s", job_post.id, user_id)
    return True


def get_saved_job_posts(db: Session, user_id: str, page: int = 1, page_size: int | None = None) -> SavedJobPostListResponse:
    page, page_size = normalize_page(page, page_size)
    items, total = get_active_for_user(db, user_id, _today(), limit=page_size, offset=page_offset(page, page_size))
    return SavedJobPostListResponse(count=total, results=[_to_list_item(s.job_post) for s in items])


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------

def _to_activity_response(activity: JobPostActivity) -> JobPostActivityResponse:
    job_post = activity.job_post
    return JobPostActivityResponse(
        id=activity.id,
        job_post_id=activity.job_post_id,
        resume_id=activity.resume_id,
        full_name=activity.full_name,
        email=activity.email,
        phone=activity.phone,
        created_at=activity.created_at,
        job_name=job_post.job_name if job_post else None,
        job_post_slug=job_post.slug if job_post else None,
        company_name=job_post.company.company_name if job_post and job_post.company else None,
        resume_title=activity.resume.title if activity.resume else None,
    )


def create_job_post_activity(db: Session, user_id: str, data: JobPostActivityCreate) -> JobPostActivityResponse:
    if not get_resume(db, data.resume_id, user_id):
        raise NotFoundError("Resume not found")
    if not get_job_post_by_id(db, data.job_post_id):
        raise NotFoundError("Job post not found")
    activity = job_post_activity_repo.create(
        db,
        user_id=user_id,
        job_post_id=data.job_post_id,
        resume_id=data.resume_id,
        full_name=data.full_name,
        email=data.email,
        phone=data.phone,
    )
    logger.info("Application submitted: job_post=%s user=%s", data.job_post_id, user_id)
    return _to_activity_response(activity)


def get_job_post_activities(
    db: Session, user_id: str, page: int = 1, page_size: int | None = None
) -> JobPostActivityListResponse:
    page, page_size = normalize_page(page, page_size)
    items, total = job_post_activity_repo.get_for_user(
        db, user_id, limit=page_size, offset=page_offset(page, page_size)
    )
    return JobPostActivityListResponse(count=total, results=[_to_activity_response(a) for a in items])


def get_employer_job_post_activities(
    db: Session,
    user_id: str,
    page: int = 1,
    page_size: int | None = None,
    job_post_id: int | None = None,
) -> JobPostActivityListResponse:
    page, page_size = normalize_page(page, page_size)
    items, total = job_post_activity_repo.get_for_employer(
        db, user_id, job_post_id=job_post_id, limit=page_size, offset=page_offset(page, page_size)
    )
    return JobPostActivityListResponse(count=total, results=[_to_activity_response(a) for a in items])


# ---------------------------------------------------------------------------
# Notification subscriptions
# ---------------------------------------------------------------------------

def _require_notification(db: Session, notification_id: int, user_id: str) -> JobPostNotification:
    notification = job_post_notification_repo.get_owned(db, notification_id, user_id)
    if not notification:
        raise NotFoundError("Job post notification not found")
    return notification


def create_job_post_notification(
    db: Session, user_id: str, data: JobPostNotificationCreate
) -> JobPostNotification:
    require_career(db, data.career_id)
    require_city(db, data.city_id)
    notification = job_post_notification_repo.create(db, user_id=user_id, **data.model_dump())
    logger.info("Job post notification %s created for %s", notification.id, user_id)
    return notification


def get_job_post_notifications(
    db: Session, user_id: str, page: int = 1, page_size: int | None = None
) -> JobPostNotificationListResponse:
    page, page_size = normalize_page(page, page_size)
    items, total = job_post_notification_repo.get_for_user(
        db, user_id, limit=page_size, offset=page_offset(page, page_size)
    )
    return JobPostNotificationListResponse(
        count=total,
        results=[JobPostNotificationResponse.model_validate(n) for n in items],
    )


def update_job_post_notification(
    db: Session, notification_id: int, user_id: str, data: JobPostNotificationUpdate
) -> JobPostNotification:
    notification = _require_notification(db, notification_id, user_id)
    if data.career_id is not None:
        require_career(db, data.career_id)
    if data.city_id is not None:
        require_city(db, data.city_id)
    return job_post_notification_repo.update(db, notification, **data.model_dump(exclude_unset=True))


def toggle_job_post_notification_active(db: Session, notification_id: int, user_id: str) -> bool:
    notification = _require_notification(db, notification_id, user_id)
    notification = job_post_notification_repo.update(db, notification, is_active=not notification.is_active)
    return notification.is_active


def delete_job_post_notification(db: Session, notification_id: int, user_id: str) -> None:
    notification = _require_notification(db, notification_id, user_id)
    job_post_notification_repo.delete(db, notification)
