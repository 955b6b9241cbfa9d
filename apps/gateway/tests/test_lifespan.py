"""FastAPI lifespan 测试

测试内容：
1. 启动时按环境变量创建 SQLite 存储并装配 lifecycle_service
2. 关闭时连接清理
3. 重启后数据仍可读取
"""

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from qmax.gateway.config import GatewayConfig
from qmax.gateway.main import create_app


@pytest.fixture
def sqlite_env(monkeypatch, tmp_path: Path) -> Path:
    db_path = tmp_path / "sqlite" / "qmax.db"
    monkeypatch.setenv("QMAX_STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("QMAX_DB_PATH", str(db_path))
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
    monkeypatch.delenv("CA_BASE_URL", raising=False)
    return db_path


class TestLifespan:
    async def test_startup_and_shutdown(self, sqlite_env: Path):
        app = create_app(GatewayConfig())

        async with app.router.lifespan_context(app):
            service = app.state.lifecycle_service
            assert service.store_group.conn is not None
            assert service.build_client.endpoint == ""
            assert sqlite_env.exists()

        assert service.store_group.conn is None

    async def test_data_survives_restart(self, sqlite_env: Path):
        app = create_app(GatewayConfig())
        async with app.router.lifespan_context(app):
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as ac:
                saved = (
                    await ac.post(
                        "/saveBlueprint", json={"screenId": "home", "blueprint": {"a": 1}}
                    )
                ).json()

        restarted = create_app(GatewayConfig())
        async with restarted.router.lifespan_context(restarted):
            async with AsyncClient(
                transport=ASGITransport(app=restarted), base_url="http://test"
            ) as ac:
                resp = await ac.get("/getBlueprint", params={"screenId": "home"})

        assert resp.status_code == 200
        assert resp.json()["blueprintId"] == saved["blueprintId"]
        assert resp.json()["content"] == {"a": 1}

    async def test_memory_backend_default(self, monkeypatch):
        monkeypatch.delenv("QMAX_STORAGE_BACKEND", raising=False)
        monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
        app = create_app(GatewayConfig())

        async with app.router.lifespan_context(app):
            assert app.state.lifecycle_service.store_group.conn is None
