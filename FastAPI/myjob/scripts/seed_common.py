"""
Seed the lookup tables (cities, districts, careers). Safe to re-run: existing
names are skipped.
Usage: python -m myjob.scripts.seed_common
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from myjob.database import SessionLocal, init_db
from myjob.repos.common_repo import (
    create_career,
    create_city,
    create_district,
    get_career_by_name,
    get_city_by_name,
    list_districts,
)

CITIES = {
    "Ha Noi": ["Ba Dinh", "Cau Giay", "Dong Da", "Hai Ba Trung", "Hoan Kiem"],
    "Ho Chi Minh": ["District 1", "District 3", "Binh Thanh", "Phu Nhuan", "Thu Duc"],
    "Da Nang": ["Hai Chau", "Thanh Khe", "Son Tra"],
}

CAREERS = [
    "Software Engineering",
    "Data Science",
    "Design",
    "Marketing",
    "Sales",
    "Accounting",
    "Human Resources",
    "Customer Service",
]


def seed(db) -> dict:
    """Insert missing cities, districts and careers. Returns counts of inserted rows."""
    counts = {"cities": 0, "districts": 0, "careers": 0}
    for city_name, district_names in CITIES.items():
        city = get_city_by_name(db, city_name)
        if not city:
            city = create_city(db, city_name)
            counts["cities"] += 1
        existing = {d.name for d in list_districts(db, city.id)}
        for district_name in district_names:
            if district_name not in existing:
                create_district(db, city.id, district_name)
                counts["districts"] += 1
    for career_name in CAREERS:
        if not get_career_by_name(db, career_name):
            create_career(db, career_name)
            counts["careers"] += 1
    return counts


def main():
    init_db()
    db = SessionLocal()
    try:
        counts = seed(db)
        print(
            f"Seeded {counts['cities']} cities, {counts['districts']} districts, "
            f"{counts['careers']} careers."
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
