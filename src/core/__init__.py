"""
Core layer: 설정, 로깅, 응답 정규화.

역할:
- default.yaml + 환경변수 설정
- 로깅 구성, 접속 문자열 마스킹
- 목록 API 응답 형태 정규화, 역할별 투영
"""

from .config import (
    ServerSettings,
    UISettings,
    load_config,
    load_server_settings,
    load_ui_settings,
)
from .logging import configure_logging, mask_credentials
from .normalize import (
    ResponseShape,
    detect_shape,
    extract_entries,
    normalize_template_list,
    project_for_role,
)

__all__ = [
    # config
    "load_config",
    "load_server_settings",
    "load_ui_settings",
    "ServerSettings",
    "UISettings",
    # logging
    "configure_logging",
    "mask_credentials",
    # normalize
    "ResponseShape",
    "detect_shape",
    "extract_entries",
    "normalize_template_list",
    "project_for_role",
]
