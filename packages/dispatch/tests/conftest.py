"""Dispatch 包测试 fixtures"""

import asyncio
import json
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from qmax.core.event_log import EventLog
from qmax.core.store import InMemoryEventStore

ENDPOINT = "http://build.test/api/ai/build-screen"

_PROXY_ENV_VARS = (
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "http_proxy",
    "https_proxy",
    "all_proxy",
)


class RecordingHandler:
    """记录收到的请求并按预设返回响应的 MockTransport handler"""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def endpoint() -> str:
    return ENDPOINT


@pytest.fixture
def event_log() -> EventLog:
    return EventLog(InMemoryEventStore())


@pytest.fixture
def sample_blueprint() -> dict:
    return {"screenId": "s1", "name": "Home", "layout": {"type": "stack"}}


@pytest.fixture
def recorder() -> Callable[..., RecordingHandler]:
    """构造 RecordingHandler：recorder(lambda req: httpx.Response(...))"""
    return RecordingHandler


@pytest_asyncio.fixture
async def trickle_server(monkeypatch) -> AsyncGenerator[str, None]:
    """本地 HTTP 服务：先发响应头，之后每 0.3 秒才发 1 字节响应体（约 6 秒发完）

    每一步读写都很快，只有整体耗时超长。
    """
    for name in _PROXY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    handlers: list[asyncio.Task] = []

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        handlers.append(asyncio.current_task())
        body = b'{"jobId": "slow-job"}'
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: application/json\r\n"
                + f"Content-Length: {len(body)}\r\n\r\n".encode()
            )
            await writer.drain()
            for i in range(len(body)):
                writer.write(body[i : i + 1])
                await writer.drain()
                await asyncio.sleep(0.3)
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    yield f"http://127.0.0.1:{port}/api/ai/build-screen"

    for task in handlers:
        task.cancel()
    server.close()
