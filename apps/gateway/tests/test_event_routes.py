"""事件路由测试 -- /logBuildEvent、/events"""

import pytest


class TestLogBuildEvent:
    async def test_append_and_list(self, client):
        resp = await client.post(
            "/logBuildEvent",
            json={"eventType": "BUILD_STARTED", "screenId": "home", "metadata": {"step": 1}},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["ok"] is True
        assert len(data["eventId"]) == 26
        assert "timestamp" in data

        listing = (await client.get("/events")).json()
        assert listing["count"] == 1
        assert listing["events"][0] == {
            "eventId": data["eventId"],
            "eventType": "BUILD_STARTED",
            "screenId": "home",
            "metadata": {"step": 1},
            "timestamp": listing["events"][0]["timestamp"],
        }

    async def test_events_oldest_first(self, client):
        for name in ("A", "B", "C"):
            await client.post("/logBuildEvent", json={"eventType": name})
        events = (await client.get("/events")).json()["events"]
        assert [e["eventType"] for e in events] == ["A", "B", "C"]

    async def test_optional_fields(self, client):
        resp = await client.post("/logBuildEvent", json={"eventType": "MANUAL"})
        assert resp.status_code == 200
        event = (await client.get("/events")).json()["events"][0]
        assert event["screenId"] is None
        assert event["metadata"] == {}

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"eventType": ""},
            {"eventType": "X", "metadata": "text"},
            {"eventType": "X", "metadata": [1, 2]},
        ],
    )
    async def test_invalid_400(self, client, body):
        resp = await client.post("/logBuildEvent", json=body)
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "INVALID_ARGUMENT"

    async def test_empty_log(self, client):
        assert (await client.get("/events")).json() == {"count": 0, "events": []}
