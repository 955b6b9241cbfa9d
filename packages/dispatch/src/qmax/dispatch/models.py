"""数据模型 -- BuildServiceResponse + DispatchResult"""

from typing import Any

from pydantic import BaseModel, Field


class BuildServiceResponse(BaseModel):
    """构建服务的原始 2xx 响应"""

    status_code: int = Field(description="HTTP 状态码")
    body: Any = Field(default=None, description="JSON 响应体，非 JSON 时为原始文本")


class DispatchResult(BaseModel):
    """一次成功 dispatch 的规范化结果"""

    status: str = Field(description="job 状态，构建服务未返回时为 submitted")
    ca_job_id: str = Field(description="构建服务返回的 job ID，缺失时本地合成")
    raw_response: Any = Field(default=None, description="构建服务原始响应体")
    upstream_status: int = Field(description="上游 HTTP 状态码")
    duration_ms: int = Field(default=0, ge=0, description="调用耗时（毫秒）")

    def to_wire(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "caJobId": self.ca_job_id,
            "rawResponse": self.raw_response,
        }
