"""
Template List View: 템플릿 목록 조회/삭제 상태 관리.

규칙:
- HR/MANAGER 외 역할은 /dashboard로 이동
- 토큰 없으면 네트워크 호출 없이 로그인으로 이동
- MANAGER는 isActive=False 항목 제외 (HR은 전체)
- 삭제는 확인 후에만 호출, 성공 시 전체 재조회 (로컬 제거 없음)
- 실패는 모두 메시지 1개로 변환, 예외로 새어나가지 않음
"""

import logging
from collections.abc import Callable

from src.core.normalize import normalize_template_list, project_for_role
from src.domain.constants import (
    DASHBOARD_PATH,
    LOGIN_PATH,
    MSG_AUTH_FAILED,
    MSG_DELETE_CONFIRM,
    MSG_DELETE_FAILED,
    MSG_DELETE_FORBIDDEN,
    MSG_LOAD_FAILED,
    MSG_LOAD_FORBIDDEN,
    MSG_NO_ACTIVE_TEMPLATES,
    MSG_NOT_AUTHENTICATED,
    delete_operation_key,
)
from src.domain.errors import ApiError
from src.domain.schemas import (
    MessageLevel,
    SessionContext,
    TemplateSummary,
    ViewMessage,
)

from .api_client import PerformanceApiClient

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]


class TemplateListView:
    """
    템플릿 목록 화면 상태.

    요청마다 새로 생성. 역할/토큰은 SessionContext로만 받음.

    Usage:
        view = TemplateListView(client, session)
        if (target := view.guard()) is not None:
            return redirect(target)
        await view.load()
    """

    def __init__(self, client: PerformanceApiClient, session: SessionContext) -> None:
        self.client = client
        self.session = session

        self.templates: list[TemplateSummary] = []
        self.loading: bool = True
        self.message: ViewMessage | None = None
        self.operation_loading: str | None = None
        self.redirect_to: str | None = None

    # =========================================================================
    # Guard / State helpers
    # =========================================================================

    def guard(self) -> str | None:
        """HR/MANAGER가 아니면 이동할 경로 반환."""
        if not self.session.can_view_templates:
            return DASHBOARD_PATH
        return None

    @property
    def error(self) -> str | None:
        """에러 메시지 텍스트 (info 메시지는 제외)."""
        if self.message is not None and self.message.is_error:
            return self.message.text
        return None

    def _set_error(self, text: str) -> None:
        self.message = ViewMessage(text=text, level=MessageLevel.ERROR)

    def _set_info(self, text: str) -> None:
        self.message = ViewMessage(text=text, level=MessageLevel.INFO)

    def is_deleting(self, template_id: str) -> bool:
        return self.operation_loading == delete_operation_key(template_id)

    # =========================================================================
    # Load
    # =========================================================================

    async def load(self) -> None:
        """
        템플릿 목록 조회.

        1. 토큰 확인 (없으면 로그인으로)
        2. GET /performance/templates
        3. 응답 형태 정규화 → 역할별 투영
        4. 표시 목록 교체
        """
        try:
            self.loading = True
            self.message = None

            token = self.session.token
            if not token:
                self._set_error(MSG_NOT_AUTHENTICATED)
                self.redirect_to = LOGIN_PATH
                return

            body = await self.client.list_templates(token)
            source = normalize_template_list(body)
            visible = project_for_role(source, self.session)

            if self.session.is_manager and not self.session.is_hr:
                logger.debug(
                    f"Filtered templates for manager (active only): "
                    f"{len(visible)}/{len(source)}"
                )

            if not visible and source:
                self._set_info(MSG_NO_ACTIVE_TEMPLATES)

            self.templates = visible
        except ApiError as e:
            logger.error(f"Load templates failed: {e}")

            if e.status_code == 403:
                self._set_error(MSG_LOAD_FORBIDDEN)
            elif e.status_code == 401:
                self._set_error(MSG_AUTH_FAILED)
                self.redirect_to = LOGIN_PATH
            else:
                self._set_error(e.message or MSG_LOAD_FAILED)
            self.templates = []
        finally:
            self.loading = False

    # =========================================================================
    # Delete
    # =========================================================================

    async def delete_template(self, template_id: str, confirm: ConfirmCallback) -> bool:
        """
        템플릿 삭제.

        Args:
            template_id: 삭제할 템플릿 ID
            confirm: 확인 콜백 (프롬프트 → 수락 여부)

        Returns:
            삭제 성공 여부 (확인 거절/실패 시 False)

        Raises:
            ValueError: template_id가 비어 있을 때
        """
        if not template_id:
            raise ValueError("template_id is required")

        if not confirm(MSG_DELETE_CONFIRM):
            return False

        try:
            self.operation_loading = delete_operation_key(template_id)
            await self.client.delete_template(template_id, self.session.token)
        except ApiError as e:
            logger.error(f"Delete template {template_id!r} failed: {e}")

            if e.status_code == 403:
                self._set_error(MSG_DELETE_FORBIDDEN)
            elif e.status_code == 400:
                self._set_error(e.message or MSG_DELETE_FAILED)
            else:
                self._set_error(MSG_DELETE_FAILED)
            return False
        finally:
            self.operation_loading = None

        logger.info(f"Template {template_id!r} deleted; reloading list")
        await self.load()
        return True
