"""
Error definitions for the performance templates UI.

에러 분류:
- UNAUTHENTICATED: 토큰 없음/거부 → 로그인으로 이동
- FORBIDDEN: 권한 부족 → 인라인 메시지 (이동 없음)
- BAD_REQUEST: 잘못된 요청 → 서버 메시지 우선
- CONNECTIVITY: 네트워크 실패 → 일반 메시지
"""

from typing import Any


class ApiError(Exception):
    """
    REST API 호출 실패 시 발생하는 에러.

    HTTP 응답이 있으면 status_code와 서버 메시지를 함께 보관.
    네트워크 실패는 status_code=None.

    Usage:
        raise ApiError(ErrorCodes.FORBIDDEN, status_code=403, message="Forbidden")
    """

    def __init__(
        self,
        code: str,
        message: str | None = None,
        status_code: int | None = None,
        **context: Any,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"[{self.code}]"]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.message:
            parts.append(self.message)
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        if ctx_str:
            parts.append(ctx_str)
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "status_code": self.status_code,
            "message": self.message,
            **self.context,
        }


class ConfigError(Exception):
    """설정 파일/환경변수 오류. 시작 시점에 즉시 실패."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        self.message = message
        super().__init__(f"[{key}] {message}")


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    BAD_REQUEST = "BAD_REQUEST"
    CONNECTIVITY = "CONNECTIVITY"
    HTTP_ERROR = "HTTP_ERROR"

    @classmethod
    def for_status(cls, status_code: int | None) -> str:
        """HTTP 상태 코드 → 에러 코드."""
        if status_code is None:
            return cls.CONNECTIVITY
        if status_code == 401:
            return cls.UNAUTHENTICATED
        if status_code == 403:
            return cls.FORBIDDEN
        if status_code == 400:
            return cls.BAD_REQUEST
        return cls.HTTP_ERROR
