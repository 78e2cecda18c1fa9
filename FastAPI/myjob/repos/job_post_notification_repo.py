from sqlalchemy.orm import Session

from myjob.models.job_post_notification import JobPostNotification


def create(
    db: Session,
    user_id: str,
    career_id: int,
    city_id: int,
    job_name: str,
    position: int | None = None,
    experience: int | None = None,
    salary: int | None = None,
    frequency: int = 7,
) -> JobPostNotification:
    notification = JobPostNotification(
        user_id=user_id,
        career_id=career_id,
        city_id=city_id,
        job_name=job_name,
        position=position,
        experience=experience,
        salary=salary,
        frequency=frequency,
        is_active=True,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def get_owned(db: Session, notification_id: int, user_id: str) -> JobPostNotification | None:
    return (
        db.query(JobPostNotification)
        .filter(JobPostNotification.id == notification_id, JobPostNotification.user_id == user_id)
        .first()
    )


def get_for_user(
    db: Session,
    user_id: str,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[JobPostNotification], int]:
    q = db.query(JobPostNotification).filter(JobPostNotification.user_id == user_id)
    total = q.count()
    items = (
        q.order_by(JobPostNotification.created_at.desc(), JobPostNotification.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return items, total


def update(db: Session, notification: JobPostNotification, **fields) -> JobPostNotification:
    """Apply non-None fields and commit."""
    for name, value in fields.items():
        if value is not None:
            setattr(notification, name, value)
    db.commit()
    db.refresh(notification)
    return notification


def delete(db: Session, notification: JobPostNotification) -> None:
    db.delete(notification)
    db.commit()
