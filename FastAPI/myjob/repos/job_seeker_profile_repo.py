from sqlalchemy.orm import Session

from myjob.models.job_seeker_profile import JobSeekerProfile
from myjob.models.user import User


def get_by_user_id(db: Session, user_id: str) -> JobSeekerProfile | None:
    return db.query(JobSeekerProfile).filter(JobSeekerProfile.user_id == user_id).first()


def create(db: Session, user: User, *, commit: bool = True) -> JobSeekerProfile:
    profile = JobSeekerProfile(user=user)
    db.add(profile)
    if commit:
        db.commit()
        db.refresh(profile)
    return profile


def update(db: Session, profile: JobSeekerProfile, **fields) -> JobSeekerProfile:
    """Apply non-None fields and commit."""
    for name, value in fields.items():
        if value is not None:
            setattr(profile, name, value)
    db.commit()
    db.refresh(profile)
    return profile
