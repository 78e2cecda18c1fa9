from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from myjob.models.company import Company
from myjob.models.company_followed import CompanyFollowed
from myjob.models.company_image import CompanyImage
from myjob.models.job_post import JobPost
from myjob.models.location import Location


def get_by_user_id(db: Session, user_id: str) -> Company | None:
    return (
        db.query(Company)
        .options(joinedload(Company.location))
        .filter(Company.user_id == user_id)
        .first()
    )


def get_by_slug(db: Session, slug: str) -> Company | None:
    return (
        db.query(Company)
        .options(joinedload(Company.location), joinedload(Company.images))
        .filter(Company.slug == slug)
        .first()
    )


def get_paginated(
    db: Session,
    keyword: str | None = None,
    city_id: int | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Company], int]:
    """Companies matching name keyword / city. Returns (items, total)."""
    q = db.query(Company)
    if city_id:
        q = q.join(Location, Company.location_id == Location.id).filter(Location.city_id == city_id)
    if keyword and keyword.strip():
        q = q.filter(Company.company_name.ilike(f"%{keyword.strip()}%"))
    total = q.count()
    items = q.order_by(Company.created_at.desc(), Company.id.desc()).offset(offset).limit(limit).all()
    return items, total


def count_job_posts(db: Session, company_id: int) -> int:
    return db.query(func.count(JobPost.id)).filter(JobPost.company_id == company_id).scalar() or 0


def add_image(db: Session, company: Company, image_url: str) -> CompanyImage:
    image = CompanyImage(company_id=company.id, image_url=image_url)
    db.add(image)
    db.commit()
    db.refresh(image)
    return image


def delete_image(db: Session, company_id: int, image_id: int) -> bool:
    image = (
        db.query(CompanyImage)
        .filter(CompanyImage.id == image_id, CompanyImage.company_id == company_id)
        .first()
    )
    if not image:
        return False
    db.delete(image)
    db.commit()
    return True


def get_follow(db: Session, user_id: str, company_id: int) -> CompanyFollowed | None:
    return (
        db.query(CompanyFollowed)
        .filter(CompanyFollowed.user_id == user_id, CompanyFollowed.company_id == company_id)
        .first()
    )


def follow(db: Session, user_id: str, company_id: int) -> bool:
    """Insert the follow row. False when the pair already exists (unique constraint)."""
    db.add(CompanyFollowed(user_id=user_id, company_id=company_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return False
    return True


def unfollow(db: Session, followed: CompanyFollowed) -> None:
    db.delete(followed)
    db.commit()
