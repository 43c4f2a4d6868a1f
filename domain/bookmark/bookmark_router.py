import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

from database.session import get_db
from domain.bookmark import bookmark_crud, bookmark_schema
from domain.common import MessageResponse, parse_id, parse_ids
from domain.headcount import headcount_crud, headcount_schema
from domain.headcount.headcount_aggregation import add_update_elapsed_time
from domain.headcount.headcount_router import to_detail_records
from domain.place.place_router import get_place_or_404
from security import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookmarks",
    tags=["Bookmark"]
)


def get_own_bookmark(
    bookmark_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    bookmark = bookmark_crud.get_bookmark(db, parse_id(bookmark_id), user_id)
    if not bookmark:
        raise HTTPException(status_code=404, detail="Not Found")
    return bookmark


@router.get("", response_model=List[bookmark_schema.Bookmark])
def get_my_bookmarks(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    try:
        bookmarks = bookmark_crud.get_bookmarks_by_user(db, user_id)
    except Exception as e:
        logger.exception("북마크 목록 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))

    if not bookmarks:
        raise HTTPException(status_code=404, detail="Not Found")
    return bookmarks


@router.get("/places/{place_id}", response_model=List[bookmark_schema.Bookmark])
def get_bookmarks_containing_place(
    user_id: int = Depends(get_current_user_id),
    place=Depends(get_place_or_404),
    db: Session = Depends(get_db)
):
    """해당 장소가 담긴 내 북마크 목록"""
    try:
        bookmarks = bookmark_crud.get_bookmarks_containing_place(db, user_id, place.id)
    except Exception as e:
        logger.exception("장소별 북마크 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))

    if not bookmarks:
        raise HTTPException(status_code=404, detail="Not Found")
    return bookmarks


@router.get("/{bookmark_id}/places", response_model=List[headcount_schema.HeadcountElapsed])
def get_bookmarked_places(
    bookmark=Depends(get_own_bookmark),
    db: Session = Depends(get_db)
):
    """
    북마크에 담긴 장소들의 최신 인원수.
    삭제된 장소를 가리키는 참조는 조회 전에 정리합니다.
    """
    try:
        pruned = bookmark_crud.prune_missing_places(db, bookmark)
        if pruned:
            logger.info(f"북마크 {bookmark.id}에서 삭제된 장소 참조 {pruned}개 정리")
        records = to_detail_records(headcount_crud.get_headcounts_by_places(db, bookmark.place_ids))
    except Exception as e:
        logger.exception("북마크 장소 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return add_update_elapsed_time(records)


@router.post("", response_model=bookmark_schema.Bookmark, status_code=status.HTTP_201_CREATED)
def create_bookmark(
    bookmark: bookmark_schema.BookmarkCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    try:
        return bookmark_crud.create_bookmark(db, user_id, bookmark)
    except Exception as e:
        logger.exception("북마크 생성 실패")
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/{bookmark_id}", response_model=MessageResponse)
def update_bookmark(
    bookmark_update: bookmark_schema.BookmarkUpdate,
    bookmark=Depends(get_own_bookmark),
    db: Session = Depends(get_db)
):
    """북마크 이름/아이콘 색 변경"""
    try:
        bookmark_crud.update_bookmark(db, bookmark, bookmark_update)
    except Exception as e:
        logger.exception("북마크 변경 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return MessageResponse()


@router.delete("/{bookmark_id}", response_model=MessageResponse)
def delete_bookmark(
    bookmark=Depends(get_own_bookmark),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    try:
        bookmark_crud.delete_bookmarks(db, [bookmark.id], user_id)
    except Exception as e:
        logger.exception("북마크 삭제 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return MessageResponse()


@router.delete("", response_model=MessageResponse)
def delete_bookmarks(
    request: bookmark_schema.BookmarkIds,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """여러 북마크 일괄 삭제. 하나도 지우지 못하면 404."""
    bookmark_ids = parse_ids(request.bookmark_ids)
    try:
        deleted = bookmark_crud.delete_bookmarks(db, bookmark_ids, user_id)
    except Exception as e:
        logger.exception("북마크 일괄 삭제 실패")
        raise HTTPException(status_code=500, detail=str(e))

    if deleted == 0:
        raise HTTPException(status_code=404, detail="Not Found")
    return MessageResponse()


@router.post("/places/{place_id}", response_model=MessageResponse)
def add_place_to_bookmarks(
    request: bookmark_schema.BookmarkIds,
    user_id: int = Depends(get_current_user_id),
    place=Depends(get_place_or_404),
    db: Session = Depends(get_db)
):
    """여러 북마크에 장소 추가. 이미 담긴 북마크가 하나라도 있으면 409."""
    bookmark_ids = parse_ids(request.bookmark_ids)
    try:
        bookmarks = bookmark_crud.get_bookmarks_by_ids(db, bookmark_ids, user_id)
        if not bookmarks:
            raise HTTPException(status_code=404, detail="Not Found")
        if any(place.id in bookmark.place_ids for bookmark in bookmarks):
            raise HTTPException(status_code=409, detail="Place already bookmarked")
        bookmark_crud.add_place_to_bookmarks(db, bookmarks, place.id)
    except HTTPException:
        raise
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Place already bookmarked")
    except Exception as e:
        logger.exception("북마크 장소 추가 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return MessageResponse()


@router.delete("/places/{place_id}", response_model=MessageResponse)
def remove_place_from_bookmarks(
    request: bookmark_schema.BookmarkIds,
    user_id: int = Depends(get_current_user_id),
    place=Depends(get_place_or_404),
    db: Session = Depends(get_db)
):
    """여러 북마크에서 장소 제거"""
    bookmark_ids = parse_ids(request.bookmark_ids)
    try:
        bookmarks = bookmark_crud.get_bookmarks_by_ids(db, bookmark_ids, user_id)
        if not bookmarks:
            raise HTTPException(status_code=404, detail="Not Found")
        bookmark_crud.remove_place_from_bookmarks(db, bookmarks, place.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("북마크 장소 제거 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return MessageResponse()
