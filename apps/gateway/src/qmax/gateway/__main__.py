"""服务入口 -- python -m qmax.gateway

使用 uvicorn 在 PORT（默认 3000）上启动 gateway。
"""

import uvicorn

from .config import load_gateway_config


def main() -> None:
    config = load_gateway_config()
    uvicorn.run(
        "qmax.gateway.main:app",
        host=config.host,
        port=config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
