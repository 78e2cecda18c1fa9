from sqlalchemy.orm import Session

from myjob.models.career import Career
from myjob.models.city import City
from myjob.models.district import District
from myjob.models.location import Location


def get_city(db: Session, city_id: int) -> City | None:
    return db.query(City).filter(City.id == city_id).first()


def get_city_by_name(db: Session, name: str) -> City | None:
    return db.query(City).filter(City.name == name).first()


def list_cities(db: Session) -> list[City]:
    return db.query(City).order_by(City.name).all()


def get_district(db: Session, district_id: int) -> District | None:
    return db.query(District).filter(District.id == district_id).first()


def list_districts(db: Session, city_id: int) -> list[District]:
    return db.query(District).filter(District.city_id == city_id).order_by(District.name).all()


def get_career(db: Session, career_id: int) -> Career | None:
    return db.query(Career).filter(Career.id == career_id).first()


def get_career_by_name(db: Session, name: str) -> Career | None:
    return db.query(Career).filter(Career.name == name).first()


def list_careers(db: Session) -> list[Career]:
    return db.query(Career).order_by(Career.name).all()


def create_city(db: Session, name: str) -> City:
    city = City(name=name)
    db.add(city)
    db.commit()
    db.refresh(city)
    return city


def create_district(db: Session, city_id: int, name: str) -> District:
    district = District(city_id=city_id, name=name)
    db.add(district)
    db.commit()
    db.refresh(district)
    return district


def create_career(db: Session, name: str, icon: str | None = None) -> Career:
    career = Career(name=name, icon=icon)
    db.add(career)
    db.commit()
    db.refresh(career)
    return career


def build_location(
    city_id: int,
    district_id: int,
    address: str,
    lat: float | None = None,
    lng: float | None = None,
) -> Location:
    """Unsaved Location; attach it to its owner and let the owner's commit insert it."""
    return Location(city_id=city_id, district_id=district_id, address=address, lat=lat, lng=lng)


def update_location(location: Location, city_id: int, district_id: int, address: str, lat=None, lng=None) -> Location:
    location.city_id = city_id
    location.district_id = district_id
    location.address = address
    location.lat = lat
    location.lng = lng
    return location
