from typing import List, Union

from pydantic import BaseModel, Field, StrictInt, StrictStr


class BookmarkBase(BaseModel):
    bookmark_name: StrictStr = Field(..., min_length=1)
    icon_color: StrictInt = Field(..., ge=0)


class BookmarkCreate(BookmarkBase):
    pass


class BookmarkUpdate(BookmarkBase):
    pass


class Bookmark(BaseModel):
    id: int
    user_id: int
    bookmark_name: str
    icon_color: int
    place_ids: List[int] = []

    class Config:
        from_attributes = True


class BookmarkIds(BaseModel):
    # 형식 검증(415)은 라우터에서 parse_ids로 수행
    bookmark_ids: List[Union[StrictInt, StrictStr]]
