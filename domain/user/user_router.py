import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

import security
from database.session import get_db
from domain.common import MessageResponse, parse_id
from domain.user import user_crud, user_schema
from services.email_service import EmailService, get_email_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["User"]
)


def get_current_user(
    user_id: int = Depends(security.get_current_user_id),
    db: Session = Depends(get_db)
):
    """토큰의 subject에 해당하는 사용자 (탈퇴 등으로 없으면 404)"""
    user = user_crud.get_user_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="Not Found")
    return user


@router.get("/me", response_model=user_schema.User)
def get_my_info(current_user=Depends(get_current_user)):
    """현재 로그인한 사용자 정보 조회"""
    return current_user


@router.get("/{user_id}", response_model=user_schema.User)
def get_user_info(
    user_id: str,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """다른 사용자 정보 조회 (관리자 전용)"""
    if current_user.role != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    user = user_crud.get_user_by_id(db, parse_id(user_id))
    if not user:
        raise HTTPException(status_code=404, detail="Not Found")
    return user


@router.patch("/me", response_model=MessageResponse)
def update_my_info(
    user_update: user_schema.UserUpdate,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """사용자 이름/이메일 변경"""
    try:
        if user_crud.email_taken_by_other(db, user_update.email, current_user.id):
            raise HTTPException(status_code=409, detail="User with this email already exists")
        user_crud.update_user_info(db, current_user.id, user_update.username, user_update.email)
    except HTTPException:
        raise
    except IntegrityError:
        raise HTTPException(status_code=409, detail="User with this email already exists")
    except Exception as e:
        logger.exception("사용자 정보 변경 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return MessageResponse()


@router.patch("/me/password", response_model=MessageResponse)
def update_my_password(
    password_update: user_schema.PasswordUpdate,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        user_crud.update_password(
            db, current_user.id, security.get_password_hash(password_update.password)
        )
    except Exception as e:
        logger.exception("비밀번호 변경 실패")
        raise HTTPException(status_code=500, detail=str(e))
    return MessageResponse()


@router.patch("/me/point", response_model=MessageResponse)
def update_my_point(
    point_update: user_schema.PointUpdate,
    user_id: int = Depends(security.get_current_user_id),
    db: Session = Depends(get_db)
):
    """포인트 증감 (음수면 차감)"""
    try:
        updated = user_crud.add_point(db, user_id, point_update.point)
    except Exception as e:
        logger.exception("포인트 변경 실패")
        raise HTTPException(status_code=500, detail=str(e))

    if not updated:
        raise HTTPException(status_code=404, detail="Not Found")
    return MessageResponse()


@router.post("/temp-password", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def issue_temp_password(
    request: user_schema.TempPasswordRequest,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service)
):
    """
    임시 비밀번호를 발급해 메일로 보냅니다.
    메일 발송에 실패하면 비밀번호 변경을 되돌립니다.
    """
    try:
        user = user_crud.get_user_by_email(db, email=request.email)
        if not user:
            raise HTTPException(status_code=404, detail="Not Found")

        temp_password = secrets.token_hex(4)
        user_crud.update_password(
            db, user.id, security.get_password_hash(temp_password), commit=False
        )

        if not email_service.send_temporary_password(user.email, user.username, temp_password):
            db.rollback()
            raise HTTPException(status_code=500, detail="Failed to send email")

        db.commit()
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.exception("임시 비밀번호 발급 실패")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"임시 비밀번호 발급: {user.id}")
    return MessageResponse()
