"""
test_modules.py - 업무 모듈 로더 테스트
"""

import sys
import types

import pytest
from fastapi import APIRouter

from src.domain.errors import ConfigError
from src.server.modules import load_routers, resolve_module


@pytest.fixture
def fake_module(monkeypatch) -> types.ModuleType:
    module = types.ModuleType("hr_modules_fake")
    module.router = APIRouter()
    module.routers = [APIRouter(), APIRouter()]
    module.not_a_router = {"path": "/x"}
    monkeypatch.setitem(sys.modules, "hr_modules_fake", module)
    return module


class TestResolveModule:
    """resolve_module 테스트."""

    def test_single_router(self, fake_module):
        assert resolve_module("hr_modules_fake:router") == [fake_module.router]

    def test_router_list(self, fake_module):
        assert resolve_module("hr_modules_fake:routers") == fake_module.routers

    @pytest.mark.parametrize("path", ["hr_modules_fake", ":router", "hr_modules_fake:"])
    def test_bad_format(self, path):
        with pytest.raises(ConfigError):
            resolve_module(path)

    def test_import_error(self):
        with pytest.raises(ConfigError):
            resolve_module("no_such_module_xyz:router")

    def test_missing_attribute(self, fake_module):
        with pytest.raises(ConfigError):
            resolve_module("hr_modules_fake:missing")

    def test_not_a_router(self, fake_module):
        with pytest.raises(ConfigError):
            resolve_module("hr_modules_fake:not_a_router")


class TestLoadRouters:
    def test_preserves_order(self, fake_module):
        routers = load_routers(["hr_modules_fake:routers", "hr_modules_fake:router"])

        assert routers == [*fake_module.routers, fake_module.router]

    def test_empty(self):
        assert load_routers([]) == []
