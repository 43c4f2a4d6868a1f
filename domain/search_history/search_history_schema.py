from datetime import datetime

from pydantic import BaseModel, Field, StrictStr


class SearchHistoryCreate(BaseModel):
    search_keyword: StrictStr = Field(..., min_length=1)
    latitude: StrictStr = Field(..., min_length=1)
    longitude: StrictStr = Field(..., min_length=1)


class SearchHistory(BaseModel):
    id: int
    user_id: int
    search_keyword: str
    latitude: str
    longitude: str
    created_at: datetime

    class Config:
        from_attributes = True
