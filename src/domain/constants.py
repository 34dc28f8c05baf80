"""
Domain Constants: 화면/API 전역 상수.

경로, 쿠키 키, 사용자 메시지 등 여러 모듈에서 공유하는 값들.
"""

from urllib.parse import quote

# =============================================================================
# Persisted Client State (쿠키 키)
# =============================================================================

TOKEN_STORAGE_KEY = "token"
ROLE_STORAGE_KEY = "role"

# =============================================================================
# REST API Paths
# =============================================================================

TEMPLATES_API_PATH = "/performance/templates"

_DOT_SEGMENTS = ("", ".", "..")


def is_path_segment(value: str) -> bool:
    """경로 한 칸으로 쓸 수 있는 값인지."""
    return str(value) not in _DOT_SEGMENTS


def path_segment(value: str) -> str:
    """
    경로 한 칸으로 쓸 값을 percent-encode.

    "/", "?", "#" 모두 인코딩 → 값이 경로/쿼리 경계를 넘지 않음.

    Raises:
        ValueError: 빈 값, ".", ".." (URL 정규화로 상위 경로가 됨)
    """
    text = str(value)
    if not is_path_segment(text):
        raise ValueError(f"Invalid path segment: {text!r}")
    return quote(text, safe="")


def template_api_path(template_id: str) -> str:
    """단일 템플릿 API 경로."""
    return f"{TEMPLATES_API_PATH}/{path_segment(template_id)}"


def delete_operation_key(template_id: str) -> str:
    """삭제 진행 중 표시용 키."""
    return f"delete-{template_id}"


# =============================================================================
# UI Routes
# =============================================================================

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
TEMPLATES_PAGE_PATH = "/performance/templates"
TEMPLATE_CREATE_PATH = "/performance/templates/create"

# =============================================================================
# User Messages
# =============================================================================

MSG_NOT_AUTHENTICATED = "Not authenticated. Please login again."
MSG_AUTH_FAILED = "Authentication failed. Please login again."
MSG_LOAD_FORBIDDEN = "You do not have permission to view templates"
MSG_LOAD_FAILED = "Failed to load templates. Please check your connection."
MSG_NO_ACTIVE_TEMPLATES = "No active templates available. Please contact HR."

MSG_DELETE_CONFIRM = "Delete this template?"
MSG_DELETE_FORBIDDEN = "You do not have permission"
MSG_DELETE_FAILED = "Failed to delete template"

# =============================================================================
# Size Helpers
# =============================================================================

_SIZE_UNITS = {
    "b": 1,
    "kb": 1024,
    "mb": 1024 * 1024,
    "gb": 1024 * 1024 * 1024,
}


def parse_size(value: int | str) -> int:
    """
    크기 문자열 → 바이트 수.

    Args:
        value: 정수 또는 "10mb", "100kb", "512" 형식

    Returns:
        바이트 수

    Raises:
        ValueError: 형식이 잘못된 경우
    """
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Size must be non-negative: {value}")
        return value

    text = str(value).strip().lower()
    for unit in ("gb", "mb", "kb", "b"):
        if text.endswith(unit):
            number = text[: -len(unit)].strip()
            return int(float(number) * _SIZE_UNITS[unit])
    return int(text)
