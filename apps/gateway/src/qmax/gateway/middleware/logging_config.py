"""structlog 配置

QMAX_LOG_FORMAT=json 输出结构化 JSON，其余取值输出 ConsoleRenderer 可读格式。
QMAX_LOG_LEVEL 控制根 logger 级别（默认 INFO）。
标准库 logging（uvicorn / httpx）与 structlog 共用同一个 formatter。
"""

import logging
import os
from typing import Any

import structlog
from fastapi import FastAPI

# 出现在日志事件中时需要遮盖的字段
SECRET_KEYS = frozenset({"api_key", "x-api-key", "authorization", "token"})
REDACTED = "***"

# 第三方 logger 单独设定的级别
_QUIET_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "aiosqlite": logging.WARNING,
    # 访问日志由 LoggingMiddleware 负责
    "uvicorn.access": logging.WARNING,
}


def redact_secrets(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """把凭证类字段替换为 ***"""
    for key in event_dict.keys() & SECRET_KEYS:
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def setup_logging() -> None:
    log_format = os.environ.get("QMAX_LOG_FORMAT", "dev").lower()
    log_level = getattr(logging, os.environ.get("QMAX_LOG_LEVEL", "INFO").upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
        shared_processors.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, log_level))


def setup_logfire(app: FastAPI) -> None:
    """LOGFIRE_SEND_TO_LOGFIRE=true 时启用 Logfire（需安装 observability extra）

    初始化失败只记录 warning，服务照常运行。
    """
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return
    try:
        import logfire

        logfire.configure(service_name="qmax-action-server")
        logfire.instrument_fastapi(app)
        logfire.instrument_httpx()
    except Exception as e:
        structlog.get_logger().warning(
            "logfire_init_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
