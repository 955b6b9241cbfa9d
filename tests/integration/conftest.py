"""集成测试 fixtures -- 完整 gateway app，存储后端参数化（memory / sqlite）"""

import itertools
import json
import os
from collections.abc import AsyncGenerator

import httpx
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from qmax.core.store import StoreGroup
from qmax.dispatch import BuildServiceClient
from qmax.gateway.config import GatewayConfig
from qmax.gateway.main import create_app
from qmax.gateway.services.lifecycle import BlueprintLifecycleService

BUILD_ENDPOINT = "http://build.test/api/ai/build-screen"
API_KEY = "integration-key"


class FakeBuildService:
    """模拟构建服务：为每次请求分配递增 job ID，并记录收到的 payload"""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self.payloads: list[dict] = []
        self.fail_next = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if self.fail_next:
            self.fail_next = False
            return httpx.Response(500, json={"error": "build crashed"})

        self.payloads.append(json.loads(request.content))
        return httpx.Response(
            202, json={"job": {"id": f"job-{next(self._counter)}", "status": "accepted"}}
        )


@pytest_asyncio.fixture
async def build_service() -> FakeBuildService:
    return FakeBuildService()


@pytest_asyncio.fixture
async def client(
    store_group: StoreGroup, build_service: FakeBuildService
) -> AsyncGenerator[AsyncClient, None]:
    """带 API key 的完整 gateway 客户端"""
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"
    app = create_app(GatewayConfig(api_key=SecretStr(API_KEY)))
    app.state.lifecycle_service = BlueprintLifecycleService.create(
        store_group,
        BuildServiceClient(BUILD_ENDPOINT, transport=httpx.MockTransport(build_service)),
    )
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"x-api-key": API_KEY},
    ) as ac:
        yield ac
    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)
