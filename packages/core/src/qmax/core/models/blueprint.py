"""Blueprint Domain Model

blueprint 记录 append-only：每次保存都是一个新版本，不原地修改。
blueprint_id 使用 ULID 格式，全局唯一；同一 screen_id 下的记录按 updated_at 构成版本历史。
对外 JSON 使用 camelCase 别名（blueprintId / screenId / createdAt ...）。
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Blueprint(BaseModel):
    """Blueprint 数据模型

    content 对 Repository 不透明，只有校验器和外部构建服务关心其结构。
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    blueprint_id: str = Field(alias="blueprintId", description="唯一标识，ULID 格式")
    screen_id: str = Field(alias="screenId", description="所属 screen，可被多个版本共享")
    version: str = Field(description="时间有序的版本 token")
    label: str | None = Field(default=None, description="展示标签")
    tags: list[str] = Field(default_factory=list, description="标签列表，保留顺序")
    content: Any = Field(description="blueprint 正文（屏幕布局定义）")
    created_at: datetime = Field(alias="createdAt", description="创建时间")
    updated_at: datetime = Field(alias="updatedAt", description="更新时间，创建后不再变化")

    def to_wire(self) -> dict[str, Any]:
        """序列化为对外 JSON 结构（camelCase）"""
        return self.model_dump(by_alias=True, mode="json")
