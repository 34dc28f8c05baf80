"""
Performance REST API 클라이언트 (httpx).

역할:
- Bearer 토큰 첨부
- HTTP 에러 → ApiError (status_code + 서버 메시지)
- 네트워크 에러 → ApiError(CONNECTIVITY)

재시도 없음: 실패는 호출한 쪽(뷰)에서 메시지로 변환.
"""

import logging
from typing import Any

import httpx

from src.domain.constants import TEMPLATES_API_PATH, template_api_path
from src.domain.errors import ApiError, ErrorCodes

logger = logging.getLogger(__name__)


def _auth_headers(token: str | None) -> dict[str, str]:
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


def extract_server_message(response: httpx.Response) -> str | None:
    """
    에러 응답 본문에서 message 추출.

    NestJS 검증 에러는 message가 배열일 수 있음 → ", "로 결합.
    """
    try:
        payload = response.json()
    except ValueError:
        return None

    if not isinstance(payload, dict):
        return None

    message = payload.get("message")
    if isinstance(message, list):
        parts = [str(m) for m in message if m]
        return ", ".join(parts) or None
    if message is None or message == "":
        return None
    return str(message)


class PerformanceApiClient:
    """
    /performance/templates 엔드포인트 래퍼.

    Usage:
        async with httpx.AsyncClient(base_url="http://localhost:3001") as http:
            client = PerformanceApiClient(http)
            body = await client.list_templates(token)
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http

    async def _request(
        self,
        method: str,
        path: str,
        token: str | None,
    ) -> httpx.Response:
        try:
            response = await self.http.request(method, path, headers=_auth_headers(token))
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(
                ErrorCodes.CONNECTIVITY,
                method=method,
                path=path,
            ) from e

        if response.is_error:
            raise ApiError(
                ErrorCodes.for_status(response.status_code),
                message=extract_server_message(response),
                status_code=response.status_code,
                method=method,
                path=path,
            )
        return response

    async def list_templates(self, token: str | None) -> Any:
        """
        템플릿 목록 조회.

        Returns:
            디코딩된 JSON 본문 (형태 정규화는 호출한 쪽에서)

        Raises:
            ApiError: HTTP/네트워크 실패
        """
        response = await self._request("GET", TEMPLATES_API_PATH, token)
        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise ApiError(
                ErrorCodes.HTTP_ERROR,
                message="Invalid JSON response",
                status_code=response.status_code,
                path=TEMPLATES_API_PATH,
            ) from e

        logger.debug(f"Templates API response: {body!r}")
        return body

    async def delete_template(self, template_id: str, token: str | None) -> None:
        """
        템플릿 삭제.

        template_id는 경로 한 칸으로 인코딩 ("?", "/" 포함 ID도 같은 리소스).

        Raises:
            ApiError: 사용할 수 없는 ID, HTTP/네트워크 실패
        """
        try:
            path = template_api_path(template_id)
        except ValueError as e:
            raise ApiError(
                ErrorCodes.BAD_REQUEST,
                message="Invalid template id",
                template_id=template_id,
            ) from e
        await self._request("DELETE", path, token)
