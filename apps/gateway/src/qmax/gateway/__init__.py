"""qmax Gateway -- blueprint 服务 HTTP 入口（FastAPI）"""
