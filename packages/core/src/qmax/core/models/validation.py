"""ValidationResult -- 校验结果（不持久化，每次请求即时计算）"""

from typing import Any

from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    """blueprint 校验结果

    valid 为 True 当且仅当 issues 为空。
    """

    valid: bool
    issues: list[str] = Field(default_factory=list, description="按检查顺序排列的问题描述")
    normalized_content: Any = Field(
        default=None,
        description="合并默认字段后的 blueprint（调用方字段优先）",
    )

    def to_wire(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "issues": list(self.issues),
            "normalizedBlueprint": self.normalized_content,
        }
