"""Event metadata 子类型

CA_DISPATCH 事件的结构化 metadata 定义。
"""

from pydantic import BaseModel, ConfigDict, Field


class CaDispatchPayload(BaseModel):
    """CA_DISPATCH 事件 metadata

    只记录 buildPrompt 的长度，不记录原文，控制事件体积。
    """

    model_config = ConfigDict(populate_by_name=True)

    ca_job_id: str = Field(alias="caJobId", description="构建服务返回或本地合成的 job ID")
    status: str = Field(description="构建服务返回的 job 状态")
    upstream_status: int = Field(alias="upstreamStatus", description="上游 HTTP 状态码")
    build_prompt_length: int = Field(alias="buildPromptLength", ge=0)
    duration_ms: int = Field(default=0, alias="durationMs", ge=0)
