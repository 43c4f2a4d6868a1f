from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.bookmark.bookmark_model import Bookmark, BookmarkPlace
from domain.search_history.search_history_model import SearchHistory
from domain.user import user_model, user_schema
from domain.withdrawal.withdrawal_model import WithdrawalReason


def get_user_by_id(db: Session, user_id: int):
    return db.query(user_model.User).filter(user_model.User.id == user_id).first()


def get_user_by_email(db: Session, email: str):
    """이메일로 사용자 조회"""
    return db.query(user_model.User).filter(user_model.User.email == email).first()


def email_taken_by_other(db: Session, email: str, user_id: int) -> bool:
    return db.query(user_model.User).filter(
        user_model.User.email == email,
        user_model.User.id != user_id
    ).first() is not None


def create_user(db: Session, user: user_schema.UserCreate, hashed_password: str):
    """이메일 중복은 unique 제약으로 막히며 IntegrityError가 호출자에게 전달됨"""
    db_user = user_model.User(
        email=user.email,
        hashed_password=hashed_password,
        username=user.username,
        role="member",
        point=0,
    )
    db.add(db_user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_user)
    return db_user


def update_user_info(db: Session, user_id: int, username: str, email: str):
    """사용자 정보를 업데이트"""
    user = get_user_by_id(db, user_id)
    if not user:
        return None

    user.username = username
    user.email = email
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    return user


def update_password(db: Session, user_id: int, hashed_password: str, commit: bool = True):
    user = get_user_by_id(db, user_id)
    if not user:
        return None

    user.hashed_password = hashed_password
    if commit:
        db.commit()
        db.refresh(user)
    else:
        db.flush()
    return user


def add_point(db: Session, user_id: int, point: int) -> bool:
    """포인트 증감을 단일 UPDATE로 처리"""
    updated = db.query(user_model.User).filter(user_model.User.id == user_id).update(
        {user_model.User.point: user_model.User.point + point},
        synchronize_session=False
    )
    db.commit()
    return updated > 0


def delete_user_account(db: Session, user_id: int, withdrawal_reason: str, feedback: str) -> bool:
    """
    회원 탈퇴: 사용자의 북마크(및 장소 참조), 검색 기록, 사용자 정보를 삭제하고
    탈퇴 사유를 기록합니다. 하나의 트랜잭션으로 커밋됩니다.
    """
    user = get_user_by_id(db, user_id)
    if not user:
        return False

    try:
        bookmark_ids = select(Bookmark.id).where(Bookmark.user_id == user_id)
        db.query(BookmarkPlace).filter(
            BookmarkPlace.bookmark_id.in_(bookmark_ids)
        ).delete(synchronize_session=False)
        db.query(Bookmark).filter(Bookmark.user_id == user_id).delete(synchronize_session=False)
        db.query(SearchHistory).filter(SearchHistory.user_id == user_id).delete(synchronize_session=False)
        db.delete(user)
        db.add(WithdrawalReason(withdrawal_reason=withdrawal_reason, feedback=feedback))
        db.commit()
    except Exception:
        db.rollback()
        raise
    return True
