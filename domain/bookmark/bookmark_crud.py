from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.bookmark import bookmark_schema
from domain.bookmark.bookmark_model import Bookmark, BookmarkPlace
from domain.place.place_model import Place


def get_bookmarks_by_user(db: Session, user_id: int):
    return db.query(Bookmark).filter(Bookmark.user_id == user_id).order_by(Bookmark.id).all()


def get_bookmark(db: Session, bookmark_id: int, user_id: int):
    """다른 사용자의 북마크는 없는 것으로 취급"""
    return db.query(Bookmark).filter(
        Bookmark.id == bookmark_id,
        Bookmark.user_id == user_id
    ).first()


def get_bookmarks_by_ids(db: Session, bookmark_ids: List[int], user_id: int):
    return db.query(Bookmark).filter(
        Bookmark.id.in_(bookmark_ids),
        Bookmark.user_id == user_id
    ).order_by(Bookmark.id).all()


def get_bookmarks_containing_place(db: Session, user_id: int, place_id: int):
    return db.query(Bookmark).join(Bookmark.places).filter(
        Bookmark.user_id == user_id,
        BookmarkPlace.place_id == place_id
    ).order_by(Bookmark.id).all()


def create_bookmark(db: Session, user_id: int, bookmark: bookmark_schema.BookmarkCreate):
    db_bookmark = Bookmark(
        user_id=user_id,
        bookmark_name=bookmark.bookmark_name,
        icon_color=bookmark.icon_color,
    )
    db.add(db_bookmark)
    db.commit()
    db.refresh(db_bookmark)
    return db_bookmark


def update_bookmark(db: Session, db_bookmark: Bookmark, bookmark_update: bookmark_schema.BookmarkUpdate):
    db_bookmark.bookmark_name = bookmark_update.bookmark_name
    db_bookmark.icon_color = bookmark_update.icon_color
    db.commit()
    db.refresh(db_bookmark)
    return db_bookmark


def delete_bookmarks(db: Session, bookmark_ids: List[int], user_id: int) -> int:
    """사용자 소유의 북마크들을 삭제하고 삭제된 개수를 반환"""
    owned_ids = [
        bookmark_id for (bookmark_id,) in db.query(Bookmark.id).filter(
            Bookmark.id.in_(bookmark_ids),
            Bookmark.user_id == user_id
        ).all()
    ]
    if not owned_ids:
        return 0

    try:
        db.query(BookmarkPlace).filter(
            BookmarkPlace.bookmark_id.in_(owned_ids)
        ).delete(synchronize_session=False)
        deleted = db.query(Bookmark).filter(
            Bookmark.id.in_(owned_ids)
        ).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return deleted


def prune_missing_places(db: Session, db_bookmark: Bookmark) -> int:
    """삭제된 장소를 가리키는 참조를 정리"""
    live_place_ids = select(Place.id)
    pruned = db.query(BookmarkPlace).filter(
        BookmarkPlace.bookmark_id == db_bookmark.id,
        ~BookmarkPlace.place_id.in_(live_place_ids)
    ).delete(synchronize_session=False)
    db.commit()
    db.expire(db_bookmark)
    return pruned


def add_place_to_bookmarks(db: Session, bookmarks: List[Bookmark], place_id: int):
    """중복 여부는 호출자가 확인하며, 경쟁 상황의 중복은 unique 제약이 막음"""
    try:
        for db_bookmark in bookmarks:
            db.add(BookmarkPlace(bookmark_id=db_bookmark.id, place_id=place_id))
        db.commit()
    except Exception:
        db.rollback()
        raise


def remove_place_from_bookmarks(db: Session, bookmarks: List[Bookmark], place_id: int) -> int:
    removed = db.query(BookmarkPlace).filter(
        BookmarkPlace.bookmark_id.in_([db_bookmark.id for db_bookmark in bookmarks]),
        BookmarkPlace.place_id == place_id
    ).delete(synchronize_session=False)
    db.commit()
    return removed
