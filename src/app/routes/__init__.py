"""
FastAPI Routes.

페이지 라우트 (HTML) + HTMX 조각
"""

from . import templates

__all__ = ["templates"]
