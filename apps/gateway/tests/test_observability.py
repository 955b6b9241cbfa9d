"""可观测性测试

测试内容：
1. 每个响应含 X-Request-ID（ULID，26 字符）
2. 不同请求 request_id 不同
3. 日志中遮盖凭证字段
"""

from qmax.gateway.middleware.logging_config import REDACTED, redact_secrets


class TestRequestId:
    async def test_request_id_in_response_header(self, client):
        resp = await client.get("/health")
        assert "x-request-id" in resp.headers
        assert len(resp.headers["x-request-id"]) == 26

    async def test_request_id_on_error_responses(self, client):
        resp = await client.get("/getBlueprint")
        assert resp.status_code == 400
        assert len(resp.headers["x-request-id"]) == 26

    async def test_request_ids_are_unique(self, client):
        ids = set()
        for _ in range(3):
            resp = await client.get("/health")
            ids.add(resp.headers["x-request-id"])
        assert len(ids) == 3


class TestRedaction:
    def test_secret_fields_masked(self):
        event = redact_secrets(
            None,
            "info",
            {"event": "x", "api_key": "k", "authorization": "Bearer t", "screen_id": "s"},
        )
        assert event["api_key"] == REDACTED
        assert event["authorization"] == REDACTED
        assert event["screen_id"] == "s"

    def test_empty_values_untouched(self):
        event = redact_secrets(None, "info", {"event": "x", "api_key": ""})
        assert event["api_key"] == ""
