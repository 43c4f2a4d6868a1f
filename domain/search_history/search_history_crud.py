from datetime import datetime

from sqlalchemy.orm import Session

from domain.search_history import search_history_schema
from domain.search_history.search_history_model import SearchHistory


def prune_previous_years(db: Session, user_id: int, now: datetime) -> int:
    """올해 이전에 생성된 검색 기록을 삭제"""
    start_of_year = datetime(now.year, 1, 1)
    pruned = db.query(SearchHistory).filter(
        SearchHistory.user_id == user_id,
        SearchHistory.created_at < start_of_year
    ).delete(synchronize_session=False)
    db.commit()
    return pruned


def get_search_histories_by_user(db: Session, user_id: int):
    return db.query(SearchHistory).filter(
        SearchHistory.user_id == user_id
    ).order_by(SearchHistory.created_at.desc(), SearchHistory.id.desc()).all()


def get_search_history(db: Session, history_id: int, user_id: int):
    return db.query(SearchHistory).filter(
        SearchHistory.id == history_id,
        SearchHistory.user_id == user_id
    ).first()


def replace_search_history(db: Session, user_id: int, history: search_history_schema.SearchHistoryCreate):
    """
    같은 검색어/좌표의 기존 기록을 지우고 새 기록을 추가합니다.
    삭제와 추가는 한 번에 커밋됩니다.
    """
    try:
        db.query(SearchHistory).filter(
            SearchHistory.user_id == user_id,
            SearchHistory.search_keyword == history.search_keyword,
            SearchHistory.latitude == history.latitude,
            SearchHistory.longitude == history.longitude
        ).delete(synchronize_session=False)
        db_history = SearchHistory(
            user_id=user_id,
            search_keyword=history.search_keyword,
            latitude=history.latitude,
            longitude=history.longitude,
        )
        db.add(db_history)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_history)
    return db_history


def delete_search_history(db: Session, db_history: SearchHistory):
    db.delete(db_history)
    db.commit()
