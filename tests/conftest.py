"""
Pytest fixtures for the performance templates tests.

구성:
- 샘플 API 응답 (배열 / items / data)
- FakePerformanceApi: httpx.MockTransport로 REST API 대체
- 세션/뷰 팩토리
"""

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import pytest

from src.app.services.api_client import PerformanceApiClient
from src.app.services.template_list import TemplateListView
from src.domain.schemas import Role, SessionContext

API_BASE_URL = "http://api.test"


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


# =============================================================================
# Sample Data
# =============================================================================

@pytest.fixture
def sample_templates() -> list[dict[str, Any]]:
    """정상 케이스 템플릿 목록 (활성/비활성/플래그 없음 혼합)."""
    return [
        {
            "_id": "t1",
            "name": "Annual 360",
            "templateType": "360",
            "ratingScale": {"type": "five_point"},
            "isActive": True,
        },
        {
            "_id": "t2",
            "name": "Q1 Review",
            "templateType": "self",
            "isActive": False,
        },
        {
            "_id": "t3",
            "name": "Manager Check-in",
            "templateType": "manager",
            "ratingScale": {"type": "three_point"},
        },
    ]


@pytest.fixture
def inactive_only_body() -> dict[str, Any]:
    """비활성 템플릿 1개 ({data} 형태)."""
    return {
        "data": [
            {"_id": "1", "name": "Q1 Review", "templateType": "self", "isActive": False},
        ],
    }


# =============================================================================
# Fake REST API
# =============================================================================

@dataclass
class FakePerformanceApi:
    """
    /performance/templates 모의 서버.

    list_status/list_body, delete_status/delete_body로 응답 지정.
    raise_connect=True면 네트워크 에러.
    """
    list_status: int = 200
    list_body: Any = field(default_factory=list)
    delete_status: int = 200
    delete_body: Any = field(default_factory=dict)
    raise_connect: bool = False
    requests: list[httpx.Request] = field(default_factory=list)
    on_request: Callable[[httpx.Request], None] | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)
        if self.raise_connect:
            raise httpx.ConnectError("connection refused", request=request)

        if request.method == "GET" and request.url.path == "/performance/templates":
            return httpx.Response(self.list_status, content=json.dumps(self.list_body))
        if request.method == "DELETE" and request.url.path.startswith("/performance/templates/"):
            return httpx.Response(self.delete_status, content=json.dumps(self.delete_body))
        return httpx.Response(404, json={"message": "Not Found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]


@pytest.fixture
def fake_api() -> FakePerformanceApi:
    """기본: 빈 목록, 삭제 성공."""
    return FakePerformanceApi()


# =============================================================================
# View Factories
# =============================================================================

@pytest.fixture
def make_session() -> Callable[..., SessionContext]:
    def _make(role: Role = Role.HR, token: str | None = "test-token") -> SessionContext:
        return SessionContext(token=token, role=role)

    return _make


@pytest.fixture
def make_view(
    fake_api: FakePerformanceApi,
    make_session: Callable[..., SessionContext],
) -> Callable[..., TemplateListView]:
    """fake_api에 연결된 TemplateListView 생성."""

    def _make(role: Role = Role.HR, token: str | None = "test-token") -> TemplateListView:
        http = httpx.AsyncClient(base_url=API_BASE_URL, transport=fake_api.transport)
        return TemplateListView(PerformanceApiClient(http), make_session(role, token))

    return _make
