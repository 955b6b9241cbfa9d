"""DispatchConfig -- 构建服务配置加载

从环境变量加载配置。base_url 为空时不阻塞启动，
在 dispatch 调用时抛出 MisconfiguredError。
"""

import os

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()

DEFAULT_BUILD_PATH = "/api/ai/build-screen"
DEFAULT_TIMEOUT_S = 30


class DispatchConfig(BaseModel):
    """构建服务配置 -- 从环境变量加载

    环境变量:
        CA_BASE_URL: 构建服务基础 URL（默认空，即未配置）
        CA_BUILD_PATH: 构建接口路径（默认 /api/ai/build-screen）
        CA_API_KEY: 出站 Bearer 凭证
        CA_TIMEOUT_S: 调用超时（秒，默认 30）
    """

    base_url: str = Field(default="", description="构建服务基础 URL")
    build_path: str = Field(default=DEFAULT_BUILD_PATH, description="构建接口路径")
    api_key: SecretStr = Field(default=SecretStr(""), description="出站 Bearer 凭证")
    timeout_s: int = Field(default=DEFAULT_TIMEOUT_S, ge=1, description="调用超时（秒）")

    @property
    def endpoint(self) -> str:
        """完整构建接口 URL；base_url 未配置时为空字符串"""
        if not self.base_url:
            return ""
        path = self.build_path if self.build_path.startswith("/") else f"/{self.build_path}"
        return f"{self.base_url.rstrip('/')}{path}"


def load_dispatch_config() -> DispatchConfig:
    """从环境变量加载构建服务配置

    Returns:
        DispatchConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("CA_BASE_URL"):
        kwargs["base_url"] = val.strip()

    if val := os.environ.get("CA_BUILD_PATH"):
        kwargs["build_path"] = val.strip()

    if val := os.environ.get("CA_API_KEY"):
        kwargs["api_key"] = SecretStr(val)

    if val := os.environ.get("CA_TIMEOUT_S"):
        try:
            timeout_s = int(val)
            if timeout_s < 1:
                raise ValueError(val)
            kwargs["timeout_s"] = timeout_s
        except ValueError:
            log.warning(
                "invalid_timeout_config",
                env_var="CA_TIMEOUT_S",
                value=val,
                fallback=DEFAULT_TIMEOUT_S,
            )

    return DispatchConfig(**kwargs)
