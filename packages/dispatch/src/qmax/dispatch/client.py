"""BuildServiceClient -- 外部构建服务调用封装

通过 httpx.AsyncClient 发送单次 POST，带超时。
连接失败、超时、非 2xx 统一包装为 DispatchFailedError。
"""

import asyncio
import time
from typing import Any

import httpx
import structlog
from qmax.core.exceptions import MisconfiguredError

from .config import DispatchConfig
from .exceptions import DispatchFailedError
from .models import BuildServiceResponse

log = structlog.get_logger()

# 健康检查超时（硬编码，应快速响应）
HEALTH_CHECK_TIMEOUT_S = 5


def _response_body(resp: httpx.Response) -> Any:
    """优先按 JSON 解析响应体，失败时返回文本"""
    try:
        return resp.json()
    except ValueError:
        return resp.text


class BuildServiceClient:
    """构建服务客户端"""

    def __init__(
        self,
        endpoint: str,
        api_key: str = "",
        timeout_s: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初始化构建服务客户端

        Args:
            endpoint: 完整构建接口 URL，空字符串表示未配置
            api_key: 出站 Bearer 凭证，空字符串时不发送 Authorization
            timeout_s: 请求超时（秒）
            transport: 自定义 httpx transport（测试时注入 MockTransport）
        """
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout_s = timeout_s
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: DispatchConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "BuildServiceClient":
        return cls(
            endpoint=config.endpoint,
            api_key=config.api_key.get_secret_value(),
            timeout_s=config.timeout_s,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def submit(self, payload: dict[str, Any]) -> BuildServiceResponse:
        """发送构建请求

        Args:
            payload: {screenId, blueprint, buildPrompt}

        Returns:
            BuildServiceResponse（仅 2xx）

        Raises:
            MisconfiguredError: 未配置构建服务地址
            DispatchFailedError: 连接失败、超时或非 2xx 响应
        """
        if not self._endpoint:
            raise MisconfiguredError("CA_BASE_URL is not configured")

        start_time = time.monotonic()
        try:
            # httpx 的 timeout 只约束单次 connect/read/write，asyncio.timeout 约束整个调用
            async with asyncio.timeout(self._timeout_s):
                async with httpx.AsyncClient(
                    timeout=self._timeout_s,
                    transport=self._transport,
                ) as http_client:
                    resp = await http_client.post(
                        self._endpoint,
                        json=payload,
                        headers=self._headers(),
                    )
        except (httpx.TimeoutException, TimeoutError) as e:
            log.error(
                "build_service_timeout",
                endpoint=self._endpoint,
                timeout_s=self._timeout_s,
            )
            raise DispatchFailedError(
                f"build service timed out after {self._timeout_s}s",
                original_error=e,
            ) from e
        except (httpx.HTTPError, OSError) as e:
            log.error(
                "build_service_unreachable",
                endpoint=self._endpoint,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DispatchFailedError(
                f"build service unreachable: {e}",
                original_error=e,
            ) from e

        duration_ms = int((time.monotonic() - start_time) * 1000)
        body = _response_body(resp)

        if not resp.is_success:
            log.error(
                "build_service_error_response",
                endpoint=self._endpoint,
                status_code=resp.status_code,
                duration_ms=duration_ms,
            )
            raise DispatchFailedError(
                f"build service responded with HTTP {resp.status_code}",
                upstream_status=resp.status_code,
                upstream_body=body,
            )

        log.debug(
            "build_service_responded",
            endpoint=self._endpoint,
            status_code=resp.status_code,
            duration_ms=duration_ms,
        )
        return BuildServiceResponse(status_code=resp.status_code, body=body)

    async def health_check(self) -> bool:
        """检查构建服务可达性（任何 HTTP 响应都视为可达）

        注意: 此方法不抛出异常，所有异常内部捕获并返回 False。
        """
        if not self._endpoint:
            return False
        try:
            async with httpx.AsyncClient(transport=self._transport) as http_client:
                await http_client.head(self._endpoint, timeout=HEALTH_CHECK_TIMEOUT_S)
                return True
        except Exception as e:
            log.debug("health_check_failed", endpoint=self._endpoint, error=str(e))
            return False
