"""pytest 全局 fixtures — 测试环境隔离"""

import pytest


@pytest.fixture(autouse=True)
def clean_planner_env(monkeypatch):
    """默认清除 TRIP_* 环境变量，确保测试不依赖本地 shell 配置"""
    monkeypatch.delenv("TRIP_DEFAULT_CURRENCY", raising=False)
    monkeypatch.delenv("TRIP_DEFAULT_BUDGET_TIER", raising=False)
    monkeypatch.delenv("TRIP_AUTO_CORRECT", raising=False)
    monkeypatch.delenv("TRIP_SCALE_ACTIVITIES", raising=False)
    yield
