import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from starlette import status

from database.session import get_db
from domain.common import parse_id
from domain.place import place_crud, place_schema
from security import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/places",
    tags=["Place"]
)


def get_place_or_404(place_id: str, db: Session = Depends(get_db)):
    place = place_crud.get_place_by_id(db, parse_id(place_id))
    if not place:
        raise HTTPException(status_code=404, detail="Not Found")
    return place


@router.get("", response_model=List[place_schema.Place])
def get_places(db: Session = Depends(get_db)):
    try:
        return place_crud.get_places(db)
    except Exception as e:
        logger.exception("장소 목록 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{place_id}", response_model=place_schema.PlaceDetail)
def get_place(place=Depends(get_place_or_404)):
    return place


@router.post("", response_model=place_schema.PlaceDetail, status_code=status.HTTP_201_CREATED)
def create_place(
    place: place_schema.PlaceCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    장소 등록. 같은 좌표의 마커가 없으면 마커를 먼저 만들고,
    "데이터 없음"을 뜻하는 인원수 기록(-1)을 함께 저장합니다.
    """
    try:
        db_place = place_crud.create_place(db, place)
    except Exception as e:
        logger.exception("장소 등록 실패")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"장소 등록: {db_place.id} (marker {db_place.marker_id}, by user {user_id})")
    return db_place


@router.put("/{place_id}", response_model=place_schema.PlaceDetail)
def update_place(
    place_update: place_schema.PlaceUpdate,
    user_id: int = Depends(get_current_user_id),
    place=Depends(get_place_or_404),
    db: Session = Depends(get_db)
):
    """장소 이름/상세 주소 변경"""
    try:
        return place_crud.update_place(db, place, place_update)
    except Exception as e:
        logger.exception("장소 변경 실패")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{place_id}", response_model=place_schema.PlaceDeleteResponse)
def delete_place(
    user_id: int = Depends(get_current_user_id),
    place=Depends(get_place_or_404),
    db: Session = Depends(get_db)
):
    """장소 삭제. 인원수 기록을 지우고, 마커의 마지막 장소였다면 마커도 지웁니다."""
    place_id = place.id
    try:
        remaining = place_crud.delete_place(db, place)
    except Exception as e:
        logger.exception("장소 삭제 실패")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"장소 삭제: {place_id} (by user {user_id})")
    return place_schema.PlaceDeleteResponse(remaining_places_cnt=remaining)
