import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.session import get_db
from domain.marker import marker_crud, marker_schema

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/markers",
    tags=["Marker"]
)


@router.get("", response_model=List[marker_schema.Marker])
def get_markers(db: Session = Depends(get_db)):
    """마커 목록 (마커는 장소 등록/삭제 시에만 생성/삭제됨)"""
    try:
        return marker_crud.get_markers(db)
    except Exception as e:
        logger.exception("마커 목록 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))
