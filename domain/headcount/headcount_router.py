import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from starlette import status

from database.session import get_db
from domain.common import parse_id
from domain.headcount import headcount_crud, headcount_schema
from domain.headcount.headcount_aggregation import add_update_elapsed_time, latest_per_marker
from domain.marker import marker_crud
from domain.place import place_crud
from security import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/headcounts",
    tags=["Headcount"]
)


def to_detail_records(headcounts):
    return [headcount_schema.HeadcountDetail.model_validate(headcount).model_dump() for headcount in headcounts]


@router.get("", response_model=List[headcount_schema.Headcount])
def get_headcounts(db: Session = Depends(get_db)):
    """전체 인원수 기록"""
    try:
        return headcount_crud.get_headcounts(db)
    except Exception as e:
        logger.exception("인원수 기록 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/places", response_model=List[headcount_schema.HeadcountElapsed])
def get_latest_by_place(db: Session = Depends(get_db)):
    """장소별 최신 인원수 (장소, 마커 정보와 경과 시간 포함)"""
    try:
        records = to_detail_records(headcount_crud.get_headcounts_with_place(db))
    except Exception as e:
        logger.exception("장소별 인원수 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return add_update_elapsed_time(records)


@router.get("/markers", response_model=List[headcount_schema.HeadcountElapsed])
def get_latest_by_marker(db: Session = Depends(get_db)):
    """마커마다 가장 최근에 갱신된 장소의 인원수"""
    try:
        records = to_detail_records(headcount_crud.get_headcounts_with_place(db))
    except Exception as e:
        logger.exception("마커별 인원수 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return latest_per_marker(add_update_elapsed_time(records))


@router.get("/places/{place_id}", response_model=headcount_schema.HeadcountElapsed)
def get_latest_for_place(place_id: str, db: Session = Depends(get_db)):
    place_id = parse_id(place_id)
    try:
        records = to_detail_records(headcount_crud.get_headcounts_by_place(db, place_id))
    except Exception as e:
        logger.exception("장소 인원수 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))

    if not records:
        raise HTTPException(status_code=404, detail="Not Found")
    return add_update_elapsed_time(records)[0]


@router.get("/markers/{marker_id}", response_model=List[headcount_schema.HeadcountElapsed])
def get_latest_for_marker(marker_id: str, db: Session = Depends(get_db)):
    """마커(좌표)에 등록된 장소들의 최신 인원수"""
    marker_id = parse_id(marker_id)
    try:
        if not marker_crud.get_marker_by_id(db, marker_id):
            raise HTTPException(status_code=404, detail="Not Found")
        records = to_detail_records(headcount_crud.get_headcounts_by_marker(db, marker_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("마커 인원수 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return add_update_elapsed_time(records)


@router.post(
    "/places/{place_id}",
    response_model=headcount_schema.Headcount,
    status_code=status.HTTP_201_CREATED
)
def create_headcount(
    place_id: str,
    headcount: headcount_schema.HeadcountCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """인원수 보고"""
    place_id = parse_id(place_id)
    try:
        if not place_crud.get_place_by_id(db, place_id):
            raise HTTPException(status_code=404, detail="Not Found")
        return headcount_crud.create_headcount(db, place_id, headcount.headcount, user_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("인원수 보고 실패")
        raise HTTPException(status_code=500, detail=str(e))
