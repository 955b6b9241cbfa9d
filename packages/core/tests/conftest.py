"""packages/core 测试配置 -- 核心层 fixture"""

import pytest
from qmax.core.event_log import EventLog
from qmax.core.repository import BlueprintRepository


@pytest.fixture
def repository(store_group) -> BlueprintRepository:
    return BlueprintRepository(store_group.blueprint_store)


@pytest.fixture
def event_log(store_group) -> EventLog:
    return EventLog(store_group.event_store)


@pytest.fixture
def sample_content() -> dict:
    """结构完整的 blueprint 正文"""
    return {
        "screenId": "s1",
        "name": "Home",
        "layout": {"type": "column", "children": [{"type": "text", "value": "hi"}]},
    }
