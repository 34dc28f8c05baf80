"""
설정 로드: default.yaml + 환경변수.

우선순위: 환경변수 > default.yaml > 코드 기본값
.env는 각 프로세스 진입점에서 load_dotenv()로 먼저 적용됨.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.domain.constants import parse_size
from src.domain.errors import ConfigError

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "default.yaml"

DEFAULT_SERVER_PORT = 3001
DEFAULT_UI_PORT = 3000
DEFAULT_BODY_LIMIT = "10mb"


# =============================================================================
# Raw Config
# =============================================================================


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    설정 파일 로드.

    Args:
        config_path: 설정 파일 경로 (None이면 APP_CONFIG 또는 프로젝트 루트의 default.yaml)

    Returns:
        설정 dict (파일이 없으면 빈 dict)
    """
    if config_path is None:
        env_path = os.environ.get("APP_CONFIG")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config", f"{config_path} must contain a mapping")
    return data


def _getenv(name: str) -> str | None:
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(name, "section must be a mapping")
    return value


def _as_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(key, f"expected an integer, got {value!r}") from None


def _as_size(key: str, value: Any) -> int:
    try:
        return parse_size(value)
    except (TypeError, ValueError):
        raise ConfigError(key, f"invalid size: {value!r}") from None


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(v) for v in value]


# =============================================================================
# API Server Settings
# =============================================================================


@dataclass(frozen=True)
class CorsSettings:
    """CORS 정책. 지정된 origin 하나만 허용."""
    allow_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    allow_credentials: bool = True
    allow_methods: list[str] = field(
        default_factory=lambda: ["GET", "POST", "PATCH", "PUT", "DELETE"]
    )
    allow_headers: list[str] = field(default_factory=lambda: ["Content-Type", "Authorization"])
    strict: bool = True


@dataclass(frozen=True)
class DocsSettings:
    """Swagger 문서 설정."""
    title: str = "Employee Profile API"
    description: str = (
        "API documentation for Employee Profile, Change Requests, Disputes, and Manager Views"
    )
    version: str = "1.0"
    docs_path: str = "/api"
    openapi_path: str = "/api-json"


@dataclass(frozen=True)
class ServerSettings:
    """API 서버 프로세스 설정."""
    port: int = DEFAULT_SERVER_PORT
    database_uri: str | None = None
    json_limit: int = parse_size(DEFAULT_BODY_LIMIT)
    urlencoded_limit: int = parse_size(DEFAULT_BODY_LIMIT)
    cors: CorsSettings = field(default_factory=CorsSettings)
    docs: DocsSettings = field(default_factory=DocsSettings)
    app_modules: list[str] = field(default_factory=list)
    log_level: str = "INFO"


def load_server_settings(config: dict[str, Any] | None = None) -> ServerSettings:
    """
    API 서버 설정 구성.

    환경변수:
    - PORT, MONGO_URI, CORS_ORIGIN, APP_MODULES, LOG_LEVEL
    """
    if config is None:
        config = load_config()

    server = _section(config, "server")
    cors = _section(server, "cors")
    limits = _section(server, "body_limits")
    docs = _section(server, "docs")
    logging_cfg = _section(config, "logging")

    defaults_cors = CorsSettings()
    origins = _as_list(_getenv("CORS_ORIGIN") or cors.get("origin")) or defaults_cors.allow_origins

    cors_settings = CorsSettings(
        allow_origins=origins,
        allow_credentials=bool(cors.get("credentials", defaults_cors.allow_credentials)),
        allow_methods=_as_list(cors.get("methods")) or defaults_cors.allow_methods,
        allow_headers=_as_list(cors.get("allowed_headers")) or defaults_cors.allow_headers,
        strict=bool(cors.get("strict", defaults_cors.strict)),
    )

    defaults_docs = DocsSettings()
    docs_settings = DocsSettings(
        title=docs.get("title", defaults_docs.title),
        description=docs.get("description", defaults_docs.description),
        version=str(docs.get("version", defaults_docs.version)),
        docs_path=docs.get("path", defaults_docs.docs_path),
        openapi_path=docs.get("openapi_path", defaults_docs.openapi_path),
    )

    port = _getenv("PORT") or server.get("port") or DEFAULT_SERVER_PORT
    modules = _getenv("APP_MODULES")

    return ServerSettings(
        port=_as_int("PORT", port),
        database_uri=_getenv("MONGO_URI") or server.get("database_uri"),
        json_limit=_as_size("body_limits.json", limits.get("json", DEFAULT_BODY_LIMIT)),
        urlencoded_limit=_as_size(
            "body_limits.urlencoded", limits.get("urlencoded", DEFAULT_BODY_LIMIT)
        ),
        cors=cors_settings,
        docs=docs_settings,
        app_modules=_as_list(modules if modules is not None else server.get("app_modules")),
        log_level=_getenv("LOG_LEVEL") or logging_cfg.get("level", "INFO"),
    )


# =============================================================================
# UI Server Settings
# =============================================================================


@dataclass(frozen=True)
class UISettings:
    """UI 서버 프로세스 설정."""
    host: str = "127.0.0.1"
    port: int = DEFAULT_UI_PORT
    api_base_url: str = f"http://localhost:{DEFAULT_SERVER_PORT}"
    api_timeout: float = 30.0
    log_level: str = "INFO"


def load_ui_settings(config: dict[str, Any] | None = None) -> UISettings:
    """
    UI 서버 설정 구성.

    환경변수:
    - UI_PORT, API_BASE_URL, LOG_LEVEL
    """
    if config is None:
        config = load_config()

    ui = _section(config, "ui")
    api = _section(config, "api")
    logging_cfg = _section(config, "logging")
    defaults = UISettings()

    timeout = api.get("timeout", defaults.api_timeout)
    try:
        api_timeout = float(timeout)
    except (TypeError, ValueError):
        raise ConfigError("api.timeout", f"expected a number, got {timeout!r}") from None

    return UISettings(
        host=ui.get("host", defaults.host),
        port=_as_int("UI_PORT", _getenv("UI_PORT") or ui.get("port") or defaults.port),
        api_base_url=(_getenv("API_BASE_URL") or api.get("base_url") or defaults.api_base_url).rstrip("/"),
        api_timeout=api_timeout,
        log_level=_getenv("LOG_LEVEL") or logging_cfg.get("level", defaults.log_level),
    )
