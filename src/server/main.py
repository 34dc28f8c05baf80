"""
API 서버 진입점.

순서:
1. .env 로드 (다른 초기화보다 먼저)
2. 설정 로드 → 로깅
3. 본문 크기 상한, CORS
4. 업무 모듈 라우터 등록
5. Swagger 문서 (/api, /api-json)

실행:
- 개발: uv run uvicorn src.server.main:create_app --factory --reload --port 3001
- 프로덕션: uv run python -m src.server.main
"""

import logging
from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI

from src.core.config import ServerSettings, load_server_settings
from src.core.logging import configure_logging, mask_credentials
from src.server.middleware import (
    JSON_CONTENT_TYPE,
    URLENCODED_CONTENT_TYPE,
    BodySizeLimitMiddleware,
    PayloadTooLarge,
    StrictCORSMiddleware,
    payload_too_large_handler,
)
from src.server.modules import load_routers

logger = logging.getLogger(__name__)


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    settings: ServerSettings | None = None,
    routers: Iterable[APIRouter] | None = None,
) -> FastAPI:
    """
    API 앱 생성.

    Args:
        settings: 서버 설정 (None이면 .env + default.yaml + 환경변수)
        routers: 업무 라우터 (None이면 settings.app_modules에서 로드)
    """
    # .env BEFORE anything else
    load_dotenv()
    if settings is None:
        settings = load_server_settings()
    configure_logging(settings.log_level)

    logger.info(f"BACKEND DB URI => {mask_credentials(settings.database_uri)}")

    if routers is None:
        routers = load_routers(settings.app_modules)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(f"Backend running at http://localhost:{settings.port}")
        logger.info(f"Swagger running at http://localhost:{settings.port}{settings.docs.docs_path}")
        yield

    docs = settings.docs
    app = FastAPI(
        title=docs.title,
        description=docs.description,
        version=docs.version,
        docs_url=docs.docs_path,
        openapi_url=docs.openapi_path,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # 본문 크기 상한 (base64 이미지 대응)
    app.add_middleware(
        BodySizeLimitMiddleware,
        limits={
            JSON_CONTENT_TYPE: settings.json_limit,
            URLENCODED_CONTENT_TYPE: settings.urlencoded_limit,
        },
    )
    app.add_exception_handler(PayloadTooLarge, payload_too_large_handler)

    # CORS: 마지막에 추가 → 가장 바깥에서 실행
    cors = settings.cors
    app.add_middleware(
        StrictCORSMiddleware,
        strict=cors.strict,
        allow_origins=cors.allow_origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )

    for router in routers:
        app.include_router(router)

    @app.get("/health", tags=["system"])
    async def health() -> dict[str, str]:
        """헬스 체크."""
        return {"status": "ok"}

    return app


# =============================================================================
# CLI Entry Point
# =============================================================================


def main() -> None:
    import uvicorn

    load_dotenv()
    settings = load_server_settings()
    app = create_app(settings)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
