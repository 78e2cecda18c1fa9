from sqlalchemy.orm import Session

from myjob.core.errors import NotFoundError
from myjob.models.career import Career
from myjob.models.city import City
from myjob.models.district import District
from myjob.repos.common_repo import (
    get_career,
    get_city,
    get_district,
    list_careers as list_careers_repo,
    list_cities as list_cities_repo,
    list_districts as list_districts_repo,
)
from myjob.schemas.common import LocationIn


def require_city(db: Session, city_id: int) -> City:
    city = get_city(db, city_id)
    if not city:
        raise NotFoundError("City not found")
    return city


def require_career(db: Session, career_id: int) -> Career:
    career = get_career(db, career_id)
    if not career:
        raise NotFoundError("Career not found")
    return career


def validate_location(db: Session, location: LocationIn) -> None:
    """City must exist and the district must belong to it."""
    require_city(db, location.city_id)
    district = get_district(db, location.district_id)
    if not district or district.city_id != location.city_id:
        raise NotFoundError("District not found")


def list_cities(db: Session) -> list[City]:
    return list_cities_repo(db)


def list_districts(db: Session, city_id: int) -> list[District]:
    require_city(db, city_id)
    return list_districts_repo(db, city_id)


def list_careers(db: Session) -> list[Career]:
    return list_careers_repo(db)
