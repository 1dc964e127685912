import asyncio

from request_review.event_bus import EventBus


def test_wildcard_subscriptions():
    bus = EventBus()
    received = []

    async def on_request(event_name, data):
        received.append(("request.*", event_name))

    def on_any(event_name, data):
        received.append(("*", event_name))

    async def scenario():
        await bus.subscribe("request.*", on_request)
        await bus.subscribe("*", on_any)
        await bus.subscribe("requests.loaded", on_any)
        await bus.emit("request.approved", {"message": "Request approved!"})
        await bus.emit("requests.loaded", {"count": 2})

    asyncio.run(scenario())
    assert received == [
        ("request.*", "request.approved"),
        ("*", "request.approved"),
        ("*", "requests.loaded"),
        ("*", "requests.loaded"),
    ]


def test_failing_handler_does_not_stop_delivery():
    bus = EventBus()
    received = []

    def broken(event_name, data):
        raise RuntimeError("display failed")

    async def scenario():
        await bus.subscribe("request.*", broken)
        await bus.subscribe("request.*", lambda name, data: received.append(name))
        await bus.emit("request.rejected", {"message": "Request rejected!"})

    asyncio.run(scenario())
    assert received == ["request.rejected"]
    assert bus.get_stats()["total_events"] == 1


def test_log_filter_limit_and_clear():
    bus = EventBus(max_log_size=3)

    async def scenario():
        for name in ["request.approved", "request.failed", "request.rejected", "requests.loaded"]:
            await bus.emit(name, {"message": name})

    asyncio.run(scenario())
    assert [e["event_name"] for e in bus.get_logs()] == ["request.failed", "request.rejected", "requests.loaded"]
    assert [e["event_name"] for e in bus.get_logs(event_filter="request.*")] == ["request.failed", "request.rejected"]
    assert [e["event_name"] for e in bus.get_logs(limit=1)] == ["requests.loaded"]
    assert bus.get_logs(limit=0) == []

    entry = bus.get_entries(limit=1)[0]
    assert entry.message == "requests.loaded"
    assert entry.level == "info"

    stats = bus.get_stats()
    assert stats["total_events"] == 4
    assert stats["events_by_type"]["request.failed"] == 1

    bus.clear_log()
    assert bus.get_logs() == []
    assert bus.get_stats()["total_events"] == 0


def test_unsubscribe():
    bus = EventBus()
    received = []

    def handler(event_name, data):
        received.append(event_name)

    async def scenario():
        await bus.subscribe("request.approved", handler)
        await bus.unsubscribe("request.approved", handler)
        await bus.unsubscribe("request.approved", handler)
        await bus.emit("request.approved", {})

    asyncio.run(scenario())
    assert received == []
    assert bus.get_stats()["subscribers_patterns"] == []
