"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 처리기, 라우터 등록.

FastAPI application entry point — Middleware, exception handlers and router
registration. Every failure is answered with the response envelope:
business and validation errors as HTTP 200 with code 900, HTTP errors keep
their status code.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import api_router
from app.cache import create_redis
from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.schemas.common import ApiResponse
from app.utils.exceptions import CommonError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Redis 클라이언트 생성 및 종료 — Open and close the Redis client."""
    app.state.redis = create_redis()
    try:
        yield
    finally:
        await app.state.redis.aclose()


app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Axiom API 로깅 미들웨어 — Axiom API request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _envelope(message: str, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ApiResponse.error(message).model_dump())


def _validation_message(errors: list[dict]) -> str:
    """첫 번째 검증 오류 요약 — Summarise the first validation error."""
    if not errors:
        return "参数错误"
    first = errors[0]
    location: str = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


@app.exception_handler(CommonError)
async def common_error_handler(request: Request, exc: CommonError) -> JSONResponse:
    """비즈니스 오류 → code 900 봉투 — Business error to the error envelope."""
    return JSONResponse(
        status_code=200,
        content=ApiResponse.error(exc.message, code=exc.code).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 검증 오류 — Request validation error to the error envelope."""
    return _envelope(_validation_message(jsonable_encoder(exc.errors())))


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """본문 내부 값 검증 오류 (page/size 등) — Validation of values parsed in services."""
    return _envelope(_validation_message(jsonable_encoder(exc.errors())))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTP 오류 — 상태 코드 유지 (HTTP errors keep their status code)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse.error(str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상치 못한 오류 — Unexpected errors are logged and hidden from the client."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope("服务器内部错误")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(api_router)
