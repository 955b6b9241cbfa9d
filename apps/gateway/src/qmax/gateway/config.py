"""GatewayConfig -- gateway 层配置加载

监听端口、入站 API key、CORS 来源。入站鉴权只在 gateway 层生效，core 不感知。
"""

import os

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()

DEFAULT_PORT = 3000


class GatewayConfig(BaseModel):
    """Gateway 配置 -- 从环境变量加载

    环境变量:
        PORT: 监听端口（默认 3000）
        QMAX_HOST: 监听地址（默认 0.0.0.0）
        QMAX_API_KEY: 入站 x-api-key，空表示不鉴权
        QMAX_CORS_ORIGINS: 逗号分隔的 CORS 来源（默认 *）
    """

    host: str = Field(default="0.0.0.0", description="监听地址")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="监听端口")
    api_key: SecretStr = Field(default=SecretStr(""), description="入站 API key")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="CORS 来源")


def load_gateway_config() -> GatewayConfig:
    """从环境变量加载 gateway 配置"""
    kwargs: dict = {}

    if val := os.environ.get("QMAX_HOST"):
        kwargs["host"] = val

    if val := os.environ.get("PORT"):
        try:
            port = int(val)
            if not 1 <= port <= 65535:
                raise ValueError(val)
            kwargs["port"] = port
        except ValueError:
            log.warning(
                "invalid_port_config",
                env_var="PORT",
                value=val,
                fallback=DEFAULT_PORT,
            )

    if val := os.environ.get("QMAX_API_KEY"):
        kwargs["api_key"] = SecretStr(val)

    if val := os.environ.get("QMAX_CORS_ORIGINS"):
        origins = [o.strip() for o in val.split(",") if o.strip()]
        if origins:
            kwargs["cors_origins"] = origins

    return GatewayConfig(**kwargs)
