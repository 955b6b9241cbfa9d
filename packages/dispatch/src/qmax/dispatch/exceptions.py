"""Dispatch 异常体系

DispatchFailedError 表示故障在下游（构建服务不可达、返回非 2xx、超时），
gateway 将其映射为 502，而不是客户端错误。
"""

from typing import Any

from qmax.core.exceptions import QmaxError


class DispatchFailedError(QmaxError):
    """构建服务调用失败，core 不自动重试"""

    code = "DISPATCH_FAILED"

    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        upstream_body: Any = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Args:
            message: 错误描述
            upstream_status: 上游 HTTP 状态码（无响应时为 None）
            upstream_body: 上游响应体（无响应时为 None）
            original_error: 原始异常
        """
        super().__init__(message)
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        self.original_error = original_error
