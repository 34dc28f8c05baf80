"""
App services: REST API 호출 + 화면 상태.
"""

from .api_client import PerformanceApiClient
from .template_list import TemplateListView

__all__ = [
    "PerformanceApiClient",
    "TemplateListView",
]
