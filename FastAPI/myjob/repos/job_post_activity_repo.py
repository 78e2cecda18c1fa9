from sqlalchemy.orm import Session, joinedload

from myjob.models.job_post import JobPost
from myjob.models.job_post_activity import JobPostActivity


def create(
    db: Session,
    user_id: str,
    job_post_id: int,
    resume_id: int,
    full_name: str,
    email: str,
    phone: str,
) -> JobPostActivity:
    activity = JobPostActivity(
        user_id=user_id,
        job_post_id=job_post_id,
        resume_id=resume_id,
        full_name=full_name,
        email=email,
        phone=phone,
    )
    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity


def get_for_user(
    db: Session,
    user_id: str,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[JobPostActivity], int]:
    """Applications submitted by a job seeker, newest first."""
    q = (
        db.query(JobPostActivity)
        .options(
            joinedload(JobPostActivity.job_post).joinedload(JobPost.company),
            joinedload(JobPostActivity.job_post).joinedload(JobPost.location),
            joinedload(JobPostActivity.resume),
        )
        .filter(JobPostActivity.user_id == user_id)
    )
    total = q.count()
    items = q.order_by(JobPostActivity.created_at.desc(), JobPostActivity.id.desc()).offset(offset).limit(limit).all()
    return items, total


def get_for_employer(
    db: Session,
    employer_id: str,
    job_post_id: int | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[JobPostActivity], int]:
    """Applications received on job posts created by `employer_id`, newest first."""
    q = (
        db.query(JobPostActivity)
        .join(JobPost, JobPostActivity.job_post_id == JobPost.id)
        .options(
            joinedload(JobPostActivity.job_post),
            joinedload(JobPostActivity.resume),
        )
        .filter(JobPost.user_id == employer_id)
    )
    if job_post_id:
        q = q.filter(JobPostActivity.job_post_id == job_post_id)
    total = q.count()
    items = q.order_by(JobPostActivity.created_at.desc(), JobPostActivity.id.desc()).offset(offset).limit(limit).all()
    return items, total
