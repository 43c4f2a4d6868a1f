import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import EmailStr
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

import security
from config import Settings, get_settings
from database.session import get_db
from domain.auth import auth_schema
from domain.common import MessageResponse
from domain.user import user_crud, user_schema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/email-check", response_model=MessageResponse)
def check_email(email: EmailStr = Query(...), db: Session = Depends(get_db)):
    """이메일 사용 가능 여부 확인"""
    try:
        if user_crud.get_user_by_email(db, email=email):
            raise HTTPException(status_code=409, detail="User with this email already exists")
        return MessageResponse()
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("이메일 확인 실패")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/login", response_model=auth_schema.Token)
def login(
    login_request: auth_schema.LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    try:
        user = user_crud.get_user_by_email(db, email=login_request.email)
    except Exception as e:
        logger.exception("로그인 사용자 조회 실패")
        raise HTTPException(status_code=500, detail=str(e))

    if not user or not security.verify_password(login_request.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = security.create_access_token(user.id, settings)
    # 브라우저 클라이언트는 쿠키로 토큰을 보냄
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
    )
    return auth_schema.Token(access_token=access_token)


@router.post("/signup", response_model=user_schema.User, status_code=status.HTTP_201_CREATED)
def signup(user: user_schema.UserCreate, db: Session = Depends(get_db)):
    try:
        if user_crud.get_user_by_email(db, email=user.email):
            raise HTTPException(status_code=409, detail="User with this email already exists")
        hashed_password = security.get_password_hash(user.password)
        db_user = user_crud.create_user(db=db, user=user, hashed_password=hashed_password)
    except HTTPException:
        raise
    except IntegrityError:
        # 동시 가입으로 unique 제약에 걸린 경우
        raise HTTPException(status_code=409, detail="User with this email already exists")
    except Exception as e:
        logger.exception("회원가입 실패")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"회원가입: {db_user.id}")
    return db_user


@router.delete("/account", response_model=MessageResponse)
def delete_account(
    account_delete: auth_schema.AccountDelete,
    user_id: int = Depends(security.get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    회원 탈퇴. 북마크와 검색 기록을 함께 삭제하고 탈퇴 사유를 남깁니다.

    이미 발급된 토큰은 만료 시각까지 유효합니다.
    """
    try:
        deleted = user_crud.delete_user_account(
            db,
            user_id,
            withdrawal_reason=account_delete.withdrawal_reason,
            feedback=account_delete.feedback
        )
    except Exception as e:
        logger.exception("회원 탈퇴 실패")
        raise HTTPException(status_code=500, detail=str(e))

    if not deleted:
        raise HTTPException(status_code=404, detail="Not Found")

    logger.info(f"회원 탈퇴: {user_id}")
    return MessageResponse()
