from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from myjob.models.resume import Resume
from myjob.models.resume_saved import ResumeSaved
from myjob.models.resume_viewed import ResumeViewed


def create(
    db: Session,
    user_id: str,
    title: str,
    description: str | None = None,
    file_url: str | None = None,
    city_id: int | None = None,
) -> Resume:
    resume = Resume(
        user_id=user_id,
        title=title,
        description=description,
        file_url=file_url,
        city_id=city_id,
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return resume


def get_by_id(db: Session, resume_id: int, user_id: str) -> Resume | None:
    return (
        db.query(Resume)
        .filter(Resume.id == resume_id, Resume.user_id == user_id)
        .first()
    )


def get_all_by_user(db: Session, user_id: str) -> list[Resume]:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.created_at.desc(), Resume.id.desc())
        .all()
    )


def delete(db: Session, resume_id: int, user_id: str) -> bool:
    resume = get_by_id(db, resume_id, user_id)
    if not resume:
        return False
    db.delete(resume)
    db.commit()
    return True


# --- Employer side: candidate resumes ---

def get_active(db: Session, resume_id: int) -> Resume | None:
    """Any seeker's resume, as long as it is still active."""
    return (
        db.query(Resume)
        .options(joinedload(Resume.user))
        .filter(Resume.id == resume_id, Resume.is_active.is_(True))
        .first()
    )


def get_saved(db: Session, resume_id: int, company_id: int) -> ResumeSaved | None:
    return (
        db.query(ResumeSaved)
        .filter(ResumeSaved.resume_id == resume_id, ResumeSaved.company_id == company_id)
        .first()
    )


def save(db: Session, resume_id: int, company_id: int) -> bool:
    """Insert the saved row. False when the pair already exists (unique constraint)."""
    db.add(ResumeSaved(resume_id=resume_id, company_id=company_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return False
    return True


def unsave(db: Session, saved: ResumeSaved) -> None:
    db.delete(saved)
    db.commit()


def get_saved_for_company(
    db: Session,
    company_id: int,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[ResumeSaved], int]:
    q = (
        db.query(ResumeSaved)
        .options(joinedload(ResumeSaved.resume).joinedload(Resume.user))
        .filter(ResumeSaved.company_id == company_id)
    )
    total = q.count()
    items = q.order_by(ResumeSaved.created_at.desc(), ResumeSaved.id.desc()).offset(offset).limit(limit).all()
    return items, total


def _bump_view(db: Session, resume_id: int, company_id: int) -> int:
    return (
        db.query(ResumeViewed)
        .filter(ResumeViewed.resume_id == resume_id, ResumeViewed.company_id == company_id)
        .update({ResumeViewed.views: ResumeViewed.views + 1}, synchronize_session=False)
    )


def record_view(db: Session, resume_id: int, company_id: int) -> None:
    """views + 1 for the pair, inserting the row on a first view."""
    if _bump_view(db, resume_id, company_id):
        db.commit()
        return
    db.add(ResumeViewed(resume_id=resume_id, company_id=company_id, views=1))
    try:
        db.commit()
    except IntegrityError:
        # Another request inserted the pair first.
        db.rollback()
        _bump_view(db, resume_id, company_id)
        db.commit()


def get_views_for_user(
    db: Session,
    user_id: str,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[ResumeViewed], int]:
    """Companies that opened any of the seeker's resumes, most recent first."""
    q = (
        db.query(ResumeViewed)
        .join(Resume, ResumeViewed.resume_id == Resume.id)
        .options(joinedload(ResumeViewed.company), joinedload(ResumeViewed.resume))
        .filter(Resume.user_id == user_id)
    )
    total = q.count()
    items = q.order_by(ResumeViewed.updated_at.desc(), ResumeViewed.id.desc()).offset(offset).limit(limit).all()
    return items, total
