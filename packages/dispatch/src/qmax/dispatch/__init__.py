"""qmax Dispatch -- 外部构建服务调用层

packages/dispatch 的公开接口导出。
"""

# 核心组件
from .client import BuildServiceClient

# 配置
from .config import DispatchConfig, load_dispatch_config

# 异常
from .exceptions import DispatchFailedError

# 数据模型
from .models import BuildServiceResponse, DispatchResult
from .proxy import DispatchProxy, extract_job_id, extract_status

__all__ = [
    "BuildServiceClient",
    "BuildServiceResponse",
    "DispatchConfig",
    "DispatchFailedError",
    "DispatchProxy",
    "DispatchResult",
    "extract_job_id",
    "extract_status",
    "load_dispatch_config",
]
