"""
test_api_client.py - PerformanceApiClient 테스트

Mock 방식: httpx.MockTransport (실제 네트워크 호출 없음)
"""

import httpx
import pytest

from src.app.services.api_client import PerformanceApiClient, extract_server_message
from src.domain.errors import ApiError, ErrorCodes


def make_client(handler) -> PerformanceApiClient:
    http = httpx.AsyncClient(base_url="http://api.test", transport=httpx.MockTransport(handler))
    return PerformanceApiClient(http)


# =============================================================================
# extract_server_message 테스트
# =============================================================================


class TestExtractServerMessage:
    """에러 본문 message 추출."""

    def test_string_message(self):
        response = httpx.Response(400, json={"message": "Bad template id"})
        assert extract_server_message(response) == "Bad template id"

    def test_list_message_joined(self):
        """NestJS 검증 에러 배열."""
        response = httpx.Response(400, json={"message": ["name is required", "type is invalid"]})
        assert extract_server_message(response) == "name is required, type is invalid"

    def test_missing_message(self):
        response = httpx.Response(400, json={"error": "Bad Request"})
        assert extract_server_message(response) is None

    def test_non_json_body(self):
        response = httpx.Response(502, text="<html>Bad Gateway</html>")
        assert extract_server_message(response) is None

    def test_empty_message(self):
        response = httpx.Response(500, json={"message": ""})
        assert extract_server_message(response) is None


# =============================================================================
# list_templates 테스트
# =============================================================================


class TestListTemplates:
    """GET /performance/templates."""

    @pytest.mark.asyncio
    async def test_returns_decoded_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/performance/templates"
            assert request.headers["Authorization"] == "Bearer tok"
            return httpx.Response(200, json={"items": [{"_id": "1"}]})

        body = await make_client(handler).list_templates("tok")

        assert body == {"items": [{"_id": "1"}]}

    @pytest.mark.asyncio
    async def test_no_token_no_header(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert "Authorization" not in request.headers
            return httpx.Response(200, json=[])

        assert await make_client(handler).list_templates(None) == []

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self):
        client = make_client(lambda request: httpx.Response(204))

        assert await client.list_templates("tok") is None

    @pytest.mark.asyncio
    async def test_http_error_raises_api_error(self):
        client = make_client(
            lambda request: httpx.Response(403, json={"message": "Forbidden resource"})
        )

        with pytest.raises(ApiError) as exc_info:
            await client.list_templates("tok")

        assert exc_info.value.status_code == 403
        assert exc_info.value.code == ErrorCodes.FORBIDDEN
        assert exc_info.value.message == "Forbidden resource"

    @pytest.mark.asyncio
    async def test_invalid_json_raises_api_error(self):
        client = make_client(lambda request: httpx.Response(200, text="not json"))

        with pytest.raises(ApiError) as exc_info:
            await client.list_templates("tok")

        assert exc_info.value.code == ErrorCodes.HTTP_ERROR

    @pytest.mark.asyncio
    async def test_connect_error_raises_connectivity(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ApiError) as exc_info:
            await make_client(handler).list_templates("tok")

        assert exc_info.value.code == ErrorCodes.CONNECTIVITY
        assert exc_info.value.status_code is None


# =============================================================================
# delete_template 테스트
# =============================================================================


class TestDeleteTemplate:
    """DELETE /performance/templates/{id}."""

    @pytest.mark.asyncio
    async def test_sends_delete(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"deleted": True})

        await make_client(handler).delete_template("abc", "tok")

        assert len(seen) == 1
        assert seen[0].method == "DELETE"
        assert seen[0].url.path == "/performance/templates/abc"

    @pytest.mark.asyncio
    async def test_bad_request_raises(self):
        client = make_client(lambda request: httpx.Response(400, json={"message": "in use"}))

        with pytest.raises(ApiError) as exc_info:
            await client.delete_template("abc", "tok")

        assert exc_info.value.code == ErrorCodes.BAD_REQUEST
        assert exc_info.value.message == "in use"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("template_id", "raw_path"),
        [
            ("abc?force=true", b"/performance/templates/abc%3Fforce%3Dtrue"),
            ("a/b", b"/performance/templates/a%2Fb"),
            ("x#frag", b"/performance/templates/x%23frag"),
            ("../users/1", b"/performance/templates/..%2Fusers%2F1"),
        ],
    )
    async def test_id_encoded_as_single_segment(self, template_id, raw_path):
        """ID 안의 "?", "/", "#"는 경로 한 칸으로 인코딩."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        await make_client(handler).delete_template(template_id, "tok")

        assert seen[0].url.raw_path == raw_path
        assert seen[0].url.query == b""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("template_id", ["", ".", ".."])
    async def test_dot_segment_id_not_sent(self, template_id):
        """"..", "."는 상위 경로로 정규화되므로 요청 자체를 보내지 않음."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        with pytest.raises(ApiError) as exc_info:
            await make_client(handler).delete_template(template_id, "tok")

        assert exc_info.value.code == ErrorCodes.BAD_REQUEST
        assert exc_info.value.status_code is None
        assert seen == []
