from pydantic import BaseModel


class Marker(BaseModel):
    id: int
    latitude: str
    longitude: str

    class Config:
        from_attributes = True
