"""
Performance Templates Routes: 템플릿 목록 화면.

- GET /performance/templates → 목록 화면 (HTML)
- GET /performance/templates/list → 목록 조각 (HTMX)
- DELETE /performance/templates/{template_id} → 삭제 후 목록 조각 (HTMX)

세션 정보(token, role)는 쿠키에서 한 번만 읽어 SessionContext로 전달.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from src.app.services.api_client import PerformanceApiClient
from src.app.services.template_list import TemplateListView
from src.domain.constants import (
    DASHBOARD_PATH,
    MSG_DELETE_CONFIRM,
    ROLE_STORAGE_KEY,
    TEMPLATE_CREATE_PATH,
    TEMPLATES_PAGE_PATH,
    TOKEN_STORAGE_KEY,
    is_path_segment,
    path_segment,
)
from src.domain.schemas import Role, SessionContext

router = APIRouter()

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
jinja_templates = Jinja2Templates(directory=TEMPLATES_DIR)
jinja_templates.env.filters["path_segment"] = path_segment
jinja_templates.env.tests["path_segment"] = is_path_segment

MESSAGE_TARGET = "#template-message"


# =============================================================================
# Dependencies
# =============================================================================


def get_session(request: Request) -> SessionContext:
    """쿠키에서 세션 정보 구성."""
    return SessionContext(
        token=request.cookies.get(TOKEN_STORAGE_KEY) or None,
        role=Role.parse(request.cookies.get(ROLE_STORAGE_KEY)),
    )


def get_api_client(request: Request) -> PerformanceApiClient:
    """앱 수명 동안 공유되는 httpx 클라이언트 사용."""
    return PerformanceApiClient(request.app.state.http)


def get_view(
    client: PerformanceApiClient = Depends(get_api_client),
    session: SessionContext = Depends(get_session),
) -> TemplateListView:
    return TemplateListView(client, session)


def _is_htmx(request: Request) -> bool:
    return request.headers.get("HX-Request") == "true"


def redirect(request: Request, target: str) -> Response:
    """HTMX 요청은 HX-Redirect, 일반 요청은 303."""
    if _is_htmx(request):
        return Response(status_code=200, headers={"HX-Redirect": target})
    return RedirectResponse(url=target, status_code=303)


def _context(view: TemplateListView) -> dict:
    return {
        "view": view,
        "session": view.session,
        "templates": view.templates,
        "message": view.message,
        "page_path": TEMPLATES_PAGE_PATH,
        "create_path": TEMPLATE_CREATE_PATH,
        "dashboard_path": DASHBOARD_PATH,
        "confirm_prompt": MSG_DELETE_CONFIRM,
    }


def render_list(request: Request, view: TemplateListView) -> HTMLResponse:
    response = jinja_templates.TemplateResponse(
        request, "performance/_list.html", _context(view)
    )
    if view.redirect_to is not None:
        response.headers["HX-Redirect"] = view.redirect_to
    return response


# =============================================================================
# Page Routes (HTML)
# =============================================================================


@router.get("", response_class=HTMLResponse)
async def templates_page(
    request: Request,
    view: TemplateListView = Depends(get_view),
) -> Response:
    """템플릿 목록 화면 (목록은 HTMX로 로드)."""
    target = view.guard()
    if target is not None:
        return redirect(request, target)

    return jinja_templates.TemplateResponse(
        request, "performance/templates.html", _context(view)
    )


@router.get("/list", response_class=HTMLResponse)
async def templates_list(
    request: Request,
    view: TemplateListView = Depends(get_view),
) -> Response:
    """
    템플릿 목록 (HTML 조각).

    토큰 없음/401이면 메시지와 함께 HX-Redirect로 로그인 이동.
    """
    target = view.guard()
    if target is not None:
        return redirect(request, target)

    await view.load()
    if view.redirect_to is not None and not _is_htmx(request):
        return redirect(request, view.redirect_to)
    return render_list(request, view)


@router.delete("/{template_id}", response_class=HTMLResponse)
async def delete_template(
    request: Request,
    template_id: str,
    confirmed: bool = False,
    view: TemplateListView = Depends(get_view),
) -> Response:
    """
    템플릿 삭제.

    hx-confirm에서 수락한 경우에만 confirmed=true로 호출됨.
    - 거절: 204 (화면 변화 없음)
    - 성공: 재조회한 목록 조각
    - 실패: 메시지만 교체 (표는 그대로)
    """
    target = view.guard()
    if target is not None:
        return redirect(request, target)

    deleted = await view.delete_template(template_id, confirm=lambda _prompt: confirmed)
    if deleted:
        return render_list(request, view)

    if view.message is None:
        return Response(status_code=204)

    return jinja_templates.TemplateResponse(
        request,
        "performance/_message.html",
        _context(view),
        headers={"HX-Retarget": MESSAGE_TARGET, "HX-Reswap": "outerHTML"},
    )
