from sqlalchemy.orm import Session, joinedload

from myjob.models.user import User
from myjob.core.security import hash_password, generate_id


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_with_relations(db: Session, email: str) -> User | None:
    """User with its job seeker profile and company loaded in the same query."""
    return (
        db.query(User)
        .options(joinedload(User.job_seeker_profile), joinedload(User.company))
        .filter(User.email == email)
        .first()
    )


def create(
    db: Session,
    email: str,
    password: str,
    full_name: str,
    role_name: str,
    *,
    commit: bool = True,
) -> User:
    user = User(
        id=generate_id(),
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        role_name=role_name,
        is_active=True,
        is_verify_email=False,
    )
    db.add(user)
    if commit:
        db.commit()
        db.refresh(user)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    full_name: str | None = None,
    avatar_url: str | None = None,
    is_active: bool | None = None,
    is_verify_email: bool | None = None,
    commit: bool = True,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if full_name is not None:
        user.full_name = full_name
    if avatar_url is not None:
        user.avatar_url = avatar_url
    if is_active is not None:
        user.is_active = is_active
    if is_verify_email is not None:
        user.is_verify_email = is_verify_email
    if commit:
        db.commit()
        db.refresh(user)
    return user
