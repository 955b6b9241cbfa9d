"""端到端生命周期测试：validate -> save -> get -> list -> sendToCA -> events"""

from httpx import AsyncClient


async def test_full_lifecycle(client: AsyncClient, build_service):
    blueprint = {"screenId": "checkout", "name": "Checkout", "layout": {"rows": []}}

    # 1. 校验（建议性）
    validation = (await client.post("/validateBlueprint", json={"blueprint": blueprint})).json()
    assert validation["valid"] is True

    # 2. 保存两个版本
    v1 = (
        await client.post(
            "/saveBlueprint",
            json={"screenId": "checkout", "blueprint": blueprint, "tags": ["draft"]},
        )
    ).json()
    v2 = (
        await client.post(
            "/saveBlueprint",
            json={
                "screenId": "checkout",
                "blueprint": {**blueprint, "name": "Checkout v2"},
                "label": "second pass",
                "tags": ["release"],
            },
        )
    ).json()
    assert v1["version"] < v2["version"]

    # 3. 读取：最新 / 指定版本
    latest = (await client.get("/getBlueprint", params={"screenId": "checkout"})).json()
    assert latest["blueprintId"] == v2["blueprintId"]
    assert latest["label"] == "second pass"
    pinned = (
        await client.get(
            "/getBlueprint", params={"screenId": "checkout", "version": v1["version"]}
        )
    ).json()
    assert pinned["content"] == blueprint

    # 4. 列表按 tag 筛选
    releases = (await client.get("/listBlueprints", params={"tag": "release"})).json()["items"]
    assert [b["blueprintId"] for b in releases] == [v2["blueprintId"]]

    # 5. dispatch 最新版本
    dispatched = await client.post(
        "/sendToCA",
        json={"screenId": "checkout", "blueprint": latest["content"], "buildPrompt": "ship it"},
    )
    assert dispatched.status_code == 200
    assert dispatched.json()["caJobId"] == "job-1"
    assert dispatched.json()["status"] == "accepted"
    assert build_service.payloads == [
        {"screenId": "checkout", "blueprint": latest["content"], "buildPrompt": "ship it"}
    ]

    # 6. 手动事件 + 查询
    await client.post(
        "/logBuildEvent",
        json={"eventType": "BUILD_FINISHED", "screenId": "checkout", "metadata": {"ok": True}},
    )
    events = (await client.get("/events")).json()
    assert events["count"] == 2
    assert [e["eventType"] for e in events["events"]] == ["CA_DISPATCH", "BUILD_FINISHED"]
    assert events["events"][0]["metadata"]["caJobId"] == "job-1"


async def test_failed_dispatch_then_retry(client: AsyncClient, build_service):
    body = {"screenId": "s1", "blueprint": {"layout": {}}, "buildPrompt": "p"}

    build_service.fail_next = True
    failed = await client.post("/sendToCA", json=body)
    assert failed.status_code == 502
    assert failed.json()["error"]["upstream_status"] == 500
    assert (await client.get("/events")).json()["count"] == 0

    retried = await client.post("/sendToCA", json=body)
    assert retried.status_code == 200
    events = (await client.get("/events")).json()["events"]
    assert len(events) == 1
    assert events[0]["metadata"]["caJobId"] == retried.json()["caJobId"]


async def test_reads_are_idempotent(client: AsyncClient):
    saved = (
        await client.post("/saveBlueprint", json={"screenId": "s1", "blueprint": {"n": 1}})
    ).json()

    first = await client.get("/getBlueprint", params={"blueprintId": saved["blueprintId"]})
    second = await client.get("/getBlueprint", params={"blueprintId": saved["blueprintId"]})
    assert first.json() == second.json()


async def test_unauthorized_without_key(client: AsyncClient):
    resp = await client.get("/events", headers={"x-api-key": ""})
    assert resp.status_code == 401
