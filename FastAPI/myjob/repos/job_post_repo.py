from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session, contains_eager, joinedload

from myjob.models.company import Company
from myjob.models.job_post import JobPost, JobPostStatus
from myjob.models.job_post_activity import JobPostActivity
from myjob.models.location import Location

# Public ordering keys -> columns. Anything else is rejected before a query is built.
ORDERABLE_COLUMNS = {
    "created_at": JobPost.created_at,
    "updated_at": JobPost.updated_at,
    "deadline": JobPost.deadline,
    "salary_max": JobPost.salary_max,
    "views": JobPost.views,
    "id": JobPost.id,
}
DEFAULT_ORDERING = "created_at"


def get_by_id(db: Session, job_post_id: int) -> JobPost | None:
    return db.query(JobPost).filter(JobPost.id == job_post_id).first()


def get_by_slug(db: Session, slug: str) -> JobPost | None:
    return (
        db.query(JobPost)
        .options(
            joinedload(JobPost.location),
            joinedload(JobPost.company),
            joinedload(JobPost.career),
        )
        .filter(JobPost.slug == slug)
        .first()
    )


def get_owned(db: Session, job_post_id: int, user_id: str) -> JobPost | None:
    return (
        db.query(JobPost)
        .options(
            joinedload(JobPost.location),
            joinedload(JobPost.company),
            joinedload(JobPost.career),
        )
        .filter(JobPost.id == job_post_id, JobPost.user_id == user_id)
        .first()
    )


def search_published(
    db: Session,
    *,
    today: date,
    ordering: str = DEFAULT_ORDERING,
    keyword: str | None = None,
    is_urgent: bool | None = None,
    career_id: int | None = None,
    company_id: int | None = None,
    city_id: int | None = None,
    status_id: int | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[JobPost], int]:
    """
    Published, unexpired job posts with company and location loaded.
    Optional filters are AND-ed on top of the published/unexpired condition.
    Returns (items, total).
    """
    q = (
        db.query(JobPost)
        .join(JobPost.company)
        .join(JobPost.location)
        .options(contains_eager(JobPost.company), contains_eager(JobPost.location))
        .filter(
            JobPost.status == JobPostStatus.PUBLISHED.value,
            JobPost.deadline >= today,
        )
    )
    if keyword and keyword.strip():
        q = q.filter(JobPost.job_name.ilike(f"%{keyword.strip()}%"))
    if is_urgent:
        q = q.filter(JobPost.is_urgent == True)
    if career_id:
        q = q.filter(JobPost.career_id == career_id)
    if company_id:
        q = q.filter(Company.id == company_id)
    if city_id:
        q = q.filter(Location.city_id == city_id)
    if status_id:
        q = q.filter(JobPost.status == status_id)
    total = q.count()
    items = (
        q.order_by(ORDERABLE_COLUMNS[ordering].desc(), JobPost.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return items, total


def search_owned(
    db: Session,
    user_id: str,
    *,
    ordering: str = DEFAULT_ORDERING,
    keyword: str | None = None,
    is_urgent: bool | None = None,
    status_id: int | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[JobPost], int]:
    """Job posts created by `user_id`, any status. Returns (items, total)."""
    q = db.query(JobPost).filter(JobPost.user_id == user_id)
    if keyword and keyword.strip():
        q = q.filter(JobPost.job_name.ilike(f"%{keyword.strip()}%"))
    if is_urgent:
        q = q.filter(JobPost.is_urgent == True)
    if status_id:
        q = q.filter(JobPost.status == status_id)
    total = q.count()
    items = (
        q.order_by(ORDERABLE_COLUMNS[ordering].desc(), JobPost.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return items, total


def count_applications(db: Session, job_post_ids: list[int]) -> dict[int, int]:
    """Number of applications per job post id; ids without applications are absent."""
    if not job_post_ids:
        return {}
    rows = (
        db.query(JobPostActivity.job_post_id, func.count(JobPostActivity.id))
        .filter(JobPostActivity.job_post_id.in_(job_post_ids))
        .group_by(JobPostActivity.job_post_id)
        .all()
    )
    return {job_post_id: count for job_post_id, count in rows}


def increment_views(db: Session, job_post_id: int) -> None:
    """Atomic views = views + 1 in the database; no read-modify-write in Python."""
    db.query(JobPost).filter(JobPost.id == job_post_id).update(
        {JobPost.views: JobPost.views + 1},
        synchronize_session=False,
    )
    db.commit()


def delete(db: Session, job_post: JobPost) -> None:
    db.delete(job_post)
    db.commit()


def set_status(db: Session, job_post: JobPost, status: JobPostStatus) -> JobPost:
    job_post.status = status.value
    db.commit()
    db.refresh(job_post)
    return job_post
