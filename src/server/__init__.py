"""
Server layer: REST API 프로세스 부트스트랩.

역할:
- .env/설정 로드, 로깅
- 본문 크기 상한, CORS, Swagger 문서
- 업무 로직은 외부 모듈 라우터에 위임 (modules.py)
"""
