import logging
import re
import unicodedata
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from myjob.config import settings
from myjob.core.errors import ConflictError

logger = logging.getLogger(__name__)

EMPTY_SLUG = "no-name"
_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")
_DISALLOWED_RE = re.compile(r"[^a-z0-9 ]")
_WHITESPACE_RE = re.compile(r"\s+")
_NUMERIC_SUFFIX_RE = re.compile(r"-(\d+)$")

T = TypeVar("T")


def slugify(name: str) -> str:
    """Lowercase, strip diacritics and anything outside [a-z0-9 ], hyphenate whitespace."""
    text = unicodedata.normalize("NFD", (name or "").lower())
    text = _COMBINING_MARKS_RE.sub("", text)
    text = _DISALLOWED_RE.sub("", text)
    return _WHITESPACE_RE.sub("-", text.strip())


def next_slug(slug: str) -> str:
    """foo -> foo-1, foo-1 -> foo-2."""
    match = _NUMERIC_SUFFIX_RE.search(slug)
    if match:
        return f"{slug[:match.start()]}-{int(match.group(1)) + 1}"
    return f"{slug}-1"


def _slug_taken(db: Session, model, slug: str, exclude_id=None) -> bool:
    q = db.query(model.id).filter(model.slug == slug)
    if exclude_id is not None:
        q = q.filter(model.id != exclude_id)
    return q.first() is not None


def generate_slug(db: Session, model, name: str, exclude_id=None) -> str:
    """First free slug for `name` among rows of `model` (ignoring row `exclude_id`)."""
    slug = slugify(name) or EMPTY_SLUG
    while _slug_taken(db, model, slug, exclude_id):
        slug = next_slug(slug)
    return slug


def persist_with_unique_slug(
    db: Session,
    model,
    name: str,
    build: Callable[[str], T],
    exclude_id=None,
) -> T:
    """
    Allocate a slug, let `build(slug)` stage the rows, and commit.
    A unique violation on the slug means another request took it between
    the check and the insert; roll back and rebuild with a fresh slug.
    """
    for attempt in range(1, settings.slug_max_attempts + 1):
        slug = generate_slug(db, model, name, exclude_id=exclude_id)
        instance = build(slug)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if not _slug_taken(db, model, slug, exclude_id):
                raise
            logger.warning(
                "Slug %r on %s was taken concurrently (attempt %d/%d)",
                slug, model.__tablename__, attempt, settings.slug_max_attempts,
            )
            continue
        db.refresh(instance)
        return instance
    raise ConflictError(f"Could not allocate a unique slug for {name!r}")
