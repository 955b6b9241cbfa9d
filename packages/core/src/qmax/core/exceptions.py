"""Core 异常体系

每个异常类携带机器可读的 code，由 gateway 映射为 HTTP 状态码。
校验问题不走异常，作为 ValidationResult 数据返回。
"""


class QmaxError(Exception):
    """qmax 基础异常"""

    code: str = "INTERNAL"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(QmaxError):
    """必填字段缺失或格式错误（调用方错误）"""

    code = "INVALID_ARGUMENT"


class NotFoundError(QmaxError):
    """引用的 blueprint / screen 不存在"""

    code = "NOT_FOUND"


class UnauthorizedError(QmaxError):
    """请求未授权 -- 仅由 gateway 层抛出，core 从不判定凭证"""

    code = "UNAUTHORIZED"


class MisconfiguredError(QmaxError):
    """必需的外部端点或凭证未配置（在调用时检测）"""

    code = "MISCONFIGURED"
