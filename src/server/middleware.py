"""
API 서버 공통 HTTP 미들웨어.

- BodySizeLimitMiddleware: JSON / URL-encoded 본문 크기 상한 (초과 시 413)
- StrictCORSMiddleware: 허용 origin 외의 교차 출처 요청 차단

둘 다 요청 단위 검사만 하며 공유 상태 없음.
"""

import logging
from collections.abc import Mapping

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
URLENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded"

PAYLOAD_TOO_LARGE_MESSAGE = "request entity too large"


# =============================================================================
# Body Size Limit
# =============================================================================


class PayloadTooLarge(HTTPException):
    """본문 크기 상한 초과."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(status_code=413, detail=PAYLOAD_TOO_LARGE_MESSAGE)


def payload_too_large_response(limit: int | None = None) -> JSONResponse:
    content: dict = {
        "statusCode": 413,
        "message": PAYLOAD_TOO_LARGE_MESSAGE,
    }
    if limit is not None:
        content["limit"] = limit
    return JSONResponse(status_code=413, content=content)


async def payload_too_large_handler(request: Request, exc: PayloadTooLarge) -> JSONResponse:
    """라우트가 본문을 읽는 도중 상한을 넘은 경우."""
    return payload_too_large_response(exc.limit)


def _media_type(headers: Mapping[str, str]) -> str:
    content_type = headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower()


class BodySizeLimitMiddleware:
    """
    Content-Type별 본문 크기 상한.

    1. Content-Length가 상한 초과 → 즉시 413 (앱 호출 없음)
    2. 스트리밍 본문은 받은 바이트 수를 세다가 초과 시 PayloadTooLarge

    limits에 없는 Content-Type은 검사하지 않음.
    """

    def __init__(self, app: ASGIApp, limits: Mapping[str, int]) -> None:
        self.app = app
        self.limits = {k.lower(): v for k, v in limits.items()}

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {
            key.decode("latin-1").lower(): value.decode("latin-1")
            for key, value in scope.get("headers", [])
        }
        limit = self.limits.get(_media_type(headers))
        if limit is None:
            await self.app(scope, receive, send)
            return

        content_length = headers.get("content-length")
        if content_length is not None and content_length.isdigit() and int(content_length) > limit:
            logger.warning(
                f"Rejected {scope.get('method')} {scope.get('path')}: "
                f"content-length {content_length} > {limit}"
            )
            response = payload_too_large_response(limit)
            await response(scope, receive, send)
            return

        received = 0
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    raise PayloadTooLarge(limit)
            return message

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracking_send)
        except PayloadTooLarge as e:
            if response_started:
                raise
            logger.warning(
                f"Rejected {scope.get('method')} {scope.get('path')}: body > {e.limit}"
            )
            response = payload_too_large_response(e.limit)
            await response(scope, receive, send)


# =============================================================================
# CORS
# =============================================================================


class StrictCORSMiddleware(CORSMiddleware):
    """
    Starlette CORSMiddleware + 비허용 origin 차단.

    - preflight: Starlette 기본 동작 (비허용 → 400)
    - 일반 요청: 허용 origin도 동일 출처도 아니면 403
    - Origin 헤더 없는 요청 (서버 간 호출, curl): 통과
    """

    def __init__(self, app: ASGIApp, strict: bool = True, **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.strict = strict

    @staticmethod
    def _is_same_origin(origin: str, scope: Scope) -> bool:
        headers = {
            key.decode("latin-1").lower(): value.decode("latin-1")
            for key, value in scope.get("headers", [])
        }
        host = headers.get("host")
        if not host:
            return False
        scheme = scope.get("scheme", "http")
        return origin.rstrip("/") == f"{scheme}://{host}"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if self.strict and scope["type"] == "http" and scope.get("method") != "OPTIONS":
            origin = None
            for key, value in scope.get("headers", []):
                if key.lower() == b"origin":
                    origin = value.decode("latin-1")
                    break

            if (
                origin is not None
                and not self.is_allowed_origin(origin)
                and not self._is_same_origin(origin, scope)
            ):
                logger.warning(f"Rejected cross-origin request from {origin!r}")
                response = PlainTextResponse("Disallowed CORS origin", status_code=403)
                await response(scope, receive, send)
                return

        await super().__call__(scope, receive, send)
