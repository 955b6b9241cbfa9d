"""错误响应映射

core / dispatch 异常 -> HTTP 状态码 + {"error": {"code", "message"}} 响应体。
dispatch 失败额外携带上游状态码与响应体，方便排查。
其余未归类异常统一返回 500 INTERNAL。
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from qmax.core.exceptions import QmaxError
from qmax.dispatch import DispatchFailedError
from starlette.responses import JSONResponse

log = structlog.get_logger()

STATUS_BY_CODE: dict[str, int] = {
    "INVALID_ARGUMENT": 400,
    "UNAUTHORIZED": 401,
    "NOT_FOUND": 404,
    "MISCONFIGURED": 500,
    "DISPATCH_FAILED": 502,
    "INTERNAL": 500,
}


def error_response(status_code: int, code: str, message: str, **extra) -> JSONResponse:
    """构造统一错误响应"""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, **extra}},
    )


async def handle_qmax_error(request: Request, exc: QmaxError) -> JSONResponse:
    status_code = STATUS_BY_CODE.get(exc.code, 500)
    extra = {}
    if isinstance(exc, DispatchFailedError):
        extra = {
            "upstream_status": exc.upstream_status,
            "upstream_body": exc.upstream_body,
        }

    log_method = log.error if status_code >= 500 else log.warning
    log_method(
        "request_failed",
        code=exc.code,
        status_code=status_code,
        message=exc.message,
    )
    return error_response(status_code, exc.code, exc.message, **extra)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求体 / 查询参数格式错误统一映射为 400 INVALID_ARGUMENT"""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    log.warning("request_validation_failed", details=details)
    return error_response(400, "INVALID_ARGUMENT", details or "invalid request")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """未归类异常 -> 500 INTERNAL，细节只进日志"""
    log.exception(
        "request_unhandled_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(500, "INTERNAL", "internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QmaxError, handle_qmax_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
