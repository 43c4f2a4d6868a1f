from typing import List

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # 토큰 발급자 / 대상
    JWT_ISSUER: str = "sinabro"
    JWT_AUDIENCE: str = "sinabro-client"
    AUTH_COOKIE_NAME: str = "user"

    # 이메일 설정
    SMTP_SERVER: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    FROM_EMAIL: str = "noreply@sinabro.com"
    FROM_NAME: str = "sinabro"
    TEMP_PASSWORD_SUBJECT: str = "[sinabro] 임시 비밀번호 발급"

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")


def get_settings(request: Request) -> Settings:
    """앱 생성 시 주입된 설정 객체를 반환"""
    return request.app.state.settings
