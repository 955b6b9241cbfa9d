"""LoggingMiddleware -- 请求级 request_id 与访问日志

每个请求分配 ULID request_id，绑定到 structlog contextvars，
并通过 X-Request-ID 响应头返回，方便与服务端日志对照。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        log = structlog.get_logger()
        start_time = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            await log.aexception(
                "request_crashed",
                duration_ms=int((time.monotonic() - start_time) * 1000),
            )
            raise

        duration_ms = int((time.monotonic() - start_time) * 1000)
        if response.status_code >= 500:
            emit = log.aerror
        elif response.status_code >= 400:
            emit = log.awarning
        else:
            emit = log.ainfo
        await emit("request_completed", status_code=response.status_code, duration_ms=duration_ms)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
