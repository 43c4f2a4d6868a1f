import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from starlette import status

from database.session import get_db
from domain.common import MessageResponse, parse_id, utcnow
from domain.search_history import search_history_crud, search_history_schema
from security import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/search-histories",
    tags=["SearchHistory"]
)


@router.get("", response_model=List[search_history_schema.SearchHistory])
def get_my_search_histories(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """내 검색 기록 (최신순). 올해 이전 기록은 조회 시 정리됩니다."""
    try:
        search_history_crud.prune_previous_years(db, user_id, utcnow())
        histories = search_history_crud.get_search_histories_by_user(db, user_id)
    except Exception as e:
        logger.exception("검색 기록 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))

    if not histories:
        raise HTTPException(status_code=404, detail="Not Found")
    return histories


@router.post("", response_model=search_history_schema.SearchHistory, status_code=status.HTTP_201_CREATED)
def create_search_history(
    history: search_history_schema.SearchHistoryCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """검색 결과 선택 기록. 같은 검색어/좌표의 기존 기록은 새 기록으로 대체됩니다."""
    try:
        return search_history_crud.replace_search_history(db, user_id, history)
    except Exception as e:
        logger.exception("검색 기록 저장 실패")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{history_id}", response_model=MessageResponse)
def delete_search_history(
    history_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    history_id = parse_id(history_id)
    try:
        history = search_history_crud.get_search_history(db, history_id, user_id)
        if not history:
            raise HTTPException(status_code=404, detail="Not Found")
        search_history_crud.delete_search_history(db, history)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("검색 기록 삭제 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return MessageResponse()
