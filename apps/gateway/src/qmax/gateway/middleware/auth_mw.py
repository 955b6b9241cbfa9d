"""ApiKeyMiddleware -- 入站 x-api-key 校验

配置了 QMAX_API_KEY 时，除公开路径外的请求都必须携带匹配的 x-api-key。
未配置时不做任何校验。core 不感知鉴权，只接收已授权的调用。
"""

import hmac

import structlog
from qmax.core.exceptions import UnauthorizedError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ..errors import error_response

log = structlog.get_logger()

API_KEY_HEADER = "x-api-key"
PUBLIC_PATHS = frozenset({"/", "/health", "/ready"})


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """入站 API key 中间件"""

    def __init__(self, app: ASGIApp, api_key: str = "") -> None:
        super().__init__(app)
        self._api_key = api_key

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self._api_key or request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        # CORS 预检请求不带凭证
        if request.method == "OPTIONS":
            return await call_next(request)

        provided = request.headers.get(API_KEY_HEADER, "")
        if not hmac.compare_digest(provided.encode(), self._api_key.encode()):
            log.warning("request_unauthorized", path=request.url.path)
            return error_response(401, UnauthorizedError.code, "missing or invalid x-api-key")

        return await call_next(request)
