import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings
from database.session import Base, build_engine, build_session_factory
from domain.auth import auth_router
from domain.bookmark import bookmark_router
from domain.headcount import headcount_router
from domain.marker import marker_router
from domain.place import place_router
from domain.search_history import search_history_router
from domain.user import user_router
# 테이블 생성을 위해 모든 모델을 등록
from domain.bookmark import bookmark_model  # noqa: F401
from domain.headcount import headcount_model  # noqa: F401
from domain.marker import marker_model  # noqa: F401
from domain.place import place_model  # noqa: F401
from domain.search_history import search_history_model  # noqa: F401
from domain.user import user_model  # noqa: F401
from domain.withdrawal import withdrawal_model  # noqa: F401
from services.email_service import EmailService

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 필드 누락, 타입 불일치(숫자 문자열 등)는 모두 400
    logger.debug(f"요청 검증 실패: {request.url.path} - {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Bad Request"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    if settings is None:
        settings = Settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    engine = build_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title="sinabro Backend API",
        description="장소별 혼잡도(인원수) 공유 서비스 백엔드 API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.email_service = EmailService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(auth_router.router, prefix="/api")
    app.include_router(user_router.router, prefix="/api")
    app.include_router(place_router.router, prefix="/api")
    app.include_router(marker_router.router, prefix="/api")
    app.include_router(headcount_router.router, prefix="/api")
    app.include_router(bookmark_router.router, prefix="/api")
    app.include_router(search_history_router.router, prefix="/api")

    @app.get("/")
    async def root():
        return {"message": "sinabro server"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=5050)
