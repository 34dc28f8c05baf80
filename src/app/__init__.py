"""
App layer: UI 서버 (FastAPI + HTMX).

역할:
- 템플릿 목록 화면, 삭제 버튼
- REST API 호출 (httpx), 역할별 표시
- ⚠️ 접근 제어의 최종 판단은 API 서버 (여기서는 화면 가드만)

주의: 폴더 구분
- src/app/templates/ → Jinja2 HTML (HTMX)
- src/app/routes/templates.py → 템플릿 목록 라우트
"""
