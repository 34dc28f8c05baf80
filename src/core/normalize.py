"""
템플릿 목록 응답 정규화 + 역할별 투영.

허용하는 응답 형태 (닫힌 집합):
- 배열: [ {...}, ... ]
- {"items": [ ... ]}
- {"data": [ ... ]}

첫 번째로 일치하는 형태를 사용하고, 아무것도 일치하지 않으면 빈 목록.
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from src.domain.schemas import SessionContext, TemplateSummary


class ResponseShape(str, Enum):
    """목록 응답 형태."""
    BARE_LIST = "bare_list"
    ITEMS = "items"
    DATA = "data"
    UNKNOWN = "unknown"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def detect_shape(body: Any) -> ResponseShape:
    """
    응답 본문의 형태 판별.

    items/data 키가 있어도 값이 null이면 다음 후보로 넘어감.
    """
    if _is_sequence(body):
        return ResponseShape.BARE_LIST
    if isinstance(body, Mapping):
        if body.get("items") is not None:
            return ResponseShape.ITEMS if _is_sequence(body["items"]) else ResponseShape.UNKNOWN
        if body.get("data") is not None:
            return ResponseShape.DATA if _is_sequence(body["data"]) else ResponseShape.UNKNOWN
    return ResponseShape.UNKNOWN


def extract_entries(body: Any) -> list[Any]:
    """형태에 맞춰 원시 항목 목록 추출."""
    shape = detect_shape(body)
    if shape is ResponseShape.BARE_LIST:
        return list(body)
    if shape is ResponseShape.ITEMS:
        return list(body["items"])
    if shape is ResponseShape.DATA:
        return list(body["data"])
    return []


def normalize_template_list(body: Any) -> list[TemplateSummary]:
    """
    응답 본문 → TemplateSummary 목록 (순서 유지).

    객체가 아닌 항목은 건너뜀.
    """
    return [
        TemplateSummary.from_dict(entry)
        for entry in extract_entries(body)
        if isinstance(entry, Mapping)
    ]


def project_for_role(
    templates: list[TemplateSummary],
    session: SessionContext,
) -> list[TemplateSummary]:
    """
    역할별 표시 목록.

    MANAGER (HR 아님): isActive가 명시적으로 False인 항목 제외.
    HR: 전체.

    클라이언트 측 편의 기능일 뿐, 접근 제어는 API 서버 책임.
    """
    if session.is_manager and not session.is_hr:
        return [t for t in templates if t.is_active is not False]
    return list(templates)
