from pydantic import BaseModel, Field


class LocationIn(BaseModel):
    city_id: int
    district_id: int
    address: str = Field(min_length=1, max_length=500)
    lat: float | None = None
    lng: float | None = None


class LocationResponse(BaseModel):
    id: int
    city_id: int
    district_id: int
    address: str
    lat: float | None = None
    lng: float | None = None

    class Config:
        from_attributes = True


class CityResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class DistrictResponse(BaseModel):
    id: int
    name: str
    city_id: int

    class Config:
        from_attributes = True


class CareerResponse(BaseModel):
    id: int
    name: str
    icon: str | None = None

    class Config:
        from_attributes = True


def reject_explicit_nulls(model: BaseModel, fields: tuple[str, ...]) -> None:
    """Partial updates may clear nullable columns, never these."""
    cleared = [name for name in fields if name in model.model_fields_set and getattr(model, name) is None]
    if cleared:
        raise ValueError(f"{', '.join(cleared)} cannot be null")
