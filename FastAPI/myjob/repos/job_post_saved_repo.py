from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from myjob.models.job_post import JobPost, JobPostStatus
from myjob.models.job_post_saved import JobPostSaved


def get(db: Session, user_id: str, job_post_id: int) -> JobPostSaved | None:
    return (
        db.query(JobPostSaved)
        .filter(JobPostSaved.user_id == user_id, JobPostSaved.job_post_id == job_post_id)
        .first()
    )


def create(db: Session, user_id: str, job_post_id: int) -> bool:
    """Insert the saved row. False when the pair already exists (unique constraint)."""
    db.add(JobPostSaved(user_id=user_id, job_post_id=job_post_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return False
    return True


def delete(db: Session, saved: JobPostSaved) -> None:
    db.delete(saved)
    db.commit()


def get_active_for_user(
    db: Session,
    user_id: str,
    today: date,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[JobPostSaved], int]:
    """Saved posts that are still published and not expired, newest saved first."""
    q = (
        db.query(JobPostSaved)
        .join(JobPost, JobPostSaved.job_post_id == JobPost.id)
        .options(
            joinedload(JobPostSaved.job_post).joinedload(JobPost.company),
            joinedload(JobPostSaved.job_post).joinedload(JobPost.location),
        )
        .filter(
            JobPostSaved.user_id == user_id,
            JobPost.status == JobPostStatus.PUBLISHED.value,
            JobPost.deadline >= today,
        )
    )
    total = q.count()
    items = q.order_by(JobPostSaved.created_at.desc(), JobPostSaved.id.desc()).offset(offset).limit(limit).all()
    return items, total
