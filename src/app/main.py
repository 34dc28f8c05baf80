"""
UI 서버 진입점 (FastAPI + HTMX).

실행:
- 개발: uv run uvicorn src.app.main:app --reload --port 3000
- 프로덕션: uv run python -m src.app.main
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.app.routes import templates
from src.core.config import UISettings, load_ui_settings
from src.core.logging import configure_logging
from src.domain.constants import TEMPLATES_PAGE_PATH

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    settings: UISettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    UI 앱 생성.

    Args:
        settings: UI 설정 (None이면 default.yaml + 환경변수)
        transport: httpx transport 주입 (테스트에서 MockTransport 사용)
    """
    load_dotenv()
    if settings is None:
        settings = load_ui_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        시작 시: REST API용 httpx 클라이언트 생성
        종료 시: 클라이언트 정리
        """
        async with httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.api_timeout,
            transport=transport,
        ) as http:
            app.state.http = http
            logger.info(f"UI server using API at {settings.api_base_url}")
            yield

    app = FastAPI(
        title="Performance Management UI",
        description="Performance review templates (HR / Manager)",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.include_router(templates.router, prefix=TEMPLATES_PAGE_PATH, tags=["Templates"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        """헬스 체크."""
        return {"status": "ok"}

    return app


app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================


def main() -> None:
    import uvicorn

    settings: UISettings = app.state.settings
    logger.info(f"Frontend running at http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
