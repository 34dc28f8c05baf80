"""
업무 로직 모듈 로더.

API 서버는 공통 관심사만 담당하고, 실제 라우트는 외부 모듈이 제공.
경로 형식: "package.module:attribute"
- attribute는 APIRouter 또는 APIRouter 목록
"""

import importlib
from collections.abc import Iterable

from fastapi import APIRouter

from src.domain.errors import ConfigError


def resolve_module(path: str) -> list[APIRouter]:
    """
    "package.module:attribute" → 라우터 목록.

    Raises:
        ConfigError: 형식 오류, import 실패, 라우터가 아닌 객체
    """
    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigError("app_modules", f"expected 'package.module:attribute', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError("app_modules", f"cannot import {module_name!r}: {e}") from e

    try:
        target = getattr(module, attribute)
    except AttributeError:
        raise ConfigError("app_modules", f"{module_name!r} has no attribute {attribute!r}") from None

    if isinstance(target, APIRouter):
        return [target]
    if isinstance(target, (list, tuple)) and all(isinstance(r, APIRouter) for r in target):
        return list(target)
    raise ConfigError("app_modules", f"{path!r} is not an APIRouter or a list of APIRouters")


def load_routers(paths: Iterable[str]) -> list[APIRouter]:
    """설정된 모든 모듈의 라우터 (순서 유지)."""
    routers: list[APIRouter] = []
    for path in paths:
        routers.extend(resolve_module(path))
    return routers
