"""依赖注入模块 -- 通过 FastAPI Depends 注入生命周期服务

服务实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request

from .services.lifecycle import BlueprintLifecycleService


def get_lifecycle_service(request: Request) -> BlueprintLifecycleService:
    """从 app.state 获取 BlueprintLifecycleService 实例"""
    return request.app.state.lifecycle_service
