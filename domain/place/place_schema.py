from pydantic import BaseModel, Field, StrictStr

from domain.marker.marker_schema import Marker


class PlaceBase(BaseModel):
    place_name: StrictStr = Field(..., min_length=1)
    detail_address: StrictStr = Field(..., min_length=1)


class PlaceCreate(PlaceBase):
    address: StrictStr = Field(..., min_length=1)
    latitude: StrictStr = Field(..., min_length=1)
    longitude: StrictStr = Field(..., min_length=1)


class PlaceUpdate(PlaceBase):
    pass


class Place(BaseModel):
    id: int
    place_name: str
    address: str
    detail_address: str
    marker_id: int

    class Config:
        from_attributes = True


class PlaceDetail(Place):
    marker: Marker


class PlaceDeleteResponse(BaseModel):
    remaining_places_cnt: int
