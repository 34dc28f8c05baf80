"""
Data schemas for the performance templates UI.

API 응답 필드명(camelCase)은 from_dict()에서만 다루고,
나머지 코드는 snake_case 속성만 사용.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Role
# =============================================================================

class Role(str, Enum):
    """
    사용자 역할.

    HR: 전체 템플릿 조회 + 생성/삭제
    MANAGER: 활성 템플릿 읽기 전용
    OTHER: 이 화면 접근 불가
    """
    HR = "HR"
    MANAGER = "MANAGER"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """문자열 → Role. 알 수 없는 값은 OTHER."""
        if not value:
            return cls.OTHER
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class SessionContext:
    """
    요청 단위 세션 정보.

    뷰는 전역 상태를 읽지 않고 이 객체만 받는다.
    토큰 형식은 검증하지 않음 (서버가 판단).
    """
    token: str | None
    role: Role = Role.OTHER

    @property
    def is_hr(self) -> bool:
        return self.role is Role.HR

    @property
    def is_manager(self) -> bool:
        return self.role is Role.MANAGER

    @property
    def can_view_templates(self) -> bool:
        return self.is_hr or self.is_manager


# =============================================================================
# Template Summary
# =============================================================================

@dataclass
class RatingScale:
    """평가 척도. 목록에서는 type만 표시."""
    type: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "RatingScale | None":
        if not isinstance(data, Mapping):
            return None
        scale_type = data.get("type")
        return cls(
            type=str(scale_type) if scale_type is not None else None,
            raw=dict(data),
        )


@dataclass
class TemplateSummary:
    """
    템플릿 목록 항목.

    API 필드:
    - _id, name, templateType, ratingScale.type, isActive
    isActive가 없으면 None (활성으로 취급).
    """
    id: str
    name: str | None = None
    template_type: str | None = None
    rating_scale: RatingScale | None = None
    is_active: bool | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TemplateSummary":
        raw_id = data.get("_id", data.get("id"))
        is_active = data.get("isActive")
        return cls(
            id="" if raw_id is None else str(raw_id),
            name=data.get("name"),
            template_type=data.get("templateType"),
            rating_scale=RatingScale.from_dict(data.get("ratingScale")),
            is_active=is_active if isinstance(is_active, bool) else None,
            raw=dict(data),
        )

    @property
    def rating_scale_type(self) -> str:
        """표시용 척도 타입 (없으면 빈 문자열)."""
        if self.rating_scale is None or self.rating_scale.type is None:
            return ""
        return self.rating_scale.type


# =============================================================================
# View Messages
# =============================================================================

class MessageLevel(str, Enum):
    """화면 메시지 수준."""
    ERROR = "error"
    INFO = "info"


@dataclass
class ViewMessage:
    """화면에 표시되는 단일 메시지."""
    text: str
    level: MessageLevel = MessageLevel.ERROR

    @property
    def is_error(self) -> bool:
        return self.level is MessageLevel.ERROR
