from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from myjob.database import get_db
from myjob.schemas.common import CareerResponse, CityResponse, DistrictResponse
from myjob.services.common_service import list_careers, list_cities, list_districts

router = APIRouter(prefix="/common", tags=["common"])


@router.get("/cities", response_model=list[CityResponse])
def cities(db: Session = Depends(get_db)):
    return list_cities(db)


@router.get("/cities/{city_id}/districts", response_model=list[DistrictResponse])
def districts(city_id: int, db: Session = Depends(get_db)):
    return list_districts(db, city_id)


@router.get("/careers", response_model=list[CareerResponse])
def careers(db: Session = Depends(get_db)):
    return list_careers(db)
