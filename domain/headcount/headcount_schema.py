from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictInt

from domain.place.place_schema import PlaceDetail


class HeadcountCreate(BaseModel):
    headcount: StrictInt = Field(..., ge=0)


class Headcount(BaseModel):
    id: int
    place_id: int
    headcount: int
    user_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class HeadcountDetail(Headcount):
    place: PlaceDetail


class HeadcountElapsed(HeadcountDetail):
    # 직전 보고 이후 경과 초, 비교할 이전 보고가 없으면 -1
    update_elapsed_time: int
