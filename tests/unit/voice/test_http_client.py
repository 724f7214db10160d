"""Tests for the httpx-backed service clients.

Requests go through httpx.MockTransport, so no server is needed.
"""

import json
from datetime import date

import httpx
import pytest

from voicedesk.voice.errors import ServiceError
from voicedesk.voice.services.http_client import ApiClient


def make_api(handler, requests=None):
    def record(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    return ApiClient(base_url="http://api.test", transport=httpx.MockTransport(record))


# =============================================================================
# Tasks
# =============================================================================


class TestHttpTaskService:
    @pytest.mark.asyncio
    async def test_create_task(self):
        requests = []
        api = make_api(
            lambda r: httpx.Response(201, json={"task": {"id": 5, "title": "buy milk"}}),
            requests,
        )

        async with api:
            task = await api.tasks.create_task(
                title="buy milk",
                description="Created via voice: create task buy milk tomorrow",
                due_date=date(2026, 10, 19),
                voice_transcription="create task buy milk tomorrow",
            )

        assert task.id == "5"
        assert task.title == "buy milk"
        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/tasks"
        body = json.loads(request.content)
        assert body["dueDate"] == "2026-10-19"
        assert body["priority"] == "medium"
        assert body["createdViaVoice"] is True
        assert body["voiceTranscription"] == "create task buy milk tomorrow"

    @pytest.mark.asyncio
    async def test_list_tasks(self):
        api = make_api(lambda r: httpx.Response(200, json={"tasks": [
            {"id": 1, "title": "Pay rent", "status": "pending",
             "dueDate": "2026-10-20T00:00:00.000Z"},
            {"id": 2, "title": "File taxes", "status": "completed", "dueDate": None},
        ]}))

        async with api:
            tasks = await api.tasks.list_tasks()

        assert [t.id for t in tasks] == ["1", "2"]
        assert tasks[0].due_date == date(2026, 10, 20)
        assert tasks[1].status == "completed"

    @pytest.mark.asyncio
    async def test_update_task(self):
        requests = []
        api = make_api(
            lambda r: httpx.Response(200, json={"task": {"id": 3, "title": "x",
                                                         "status": "completed"}}),
            requests,
        )

        async with api:
            task = await api.tasks.update_task("3", {"status": "completed"})

        assert task.status == "completed"
        assert requests[0].method == "PATCH"
        assert requests[0].url.path == "/api/tasks/3"
        assert json.loads(requests[0].content) == {"status": "completed"}


# =============================================================================
# Finances and AI
# =============================================================================


class TestHttpFinanceAndAI:
    @pytest.mark.asyncio
    async def test_create_record(self):
        requests = []
        api = make_api(
            lambda r: httpx.Response(201, json={"record": {
                "id": 11, "type": "expense", "amount": "25.50", "description": "lunch",
            }}),
            requests,
        )

        async with api:
            record = await api.finance.create_record("expense", 25.5, "lunch")

        assert record.id == "11"
        assert record.amount == 25.5
        assert requests[0].url.path == "/api/financial/records"
        assert json.loads(requests[0].content)["category"] == "general"

    @pytest.mark.asyncio
    async def test_chat_and_joke(self):
        def handler(request):
            if request.url.path == "/api/ai/chat":
                return httpx.Response(200, json={"content": "Sure."})
            return httpx.Response(200, json={"joke": "A joke."})

        async with make_api(handler) as api:
            assert await api.ai.chat("hello") == "Sure."
            assert await api.ai.get_joke() == "A joke."


# =============================================================================
# Failures
# =============================================================================


class TestFailures:
    @pytest.mark.asyncio
    async def test_http_error_status(self):
        async with make_api(lambda r: httpx.Response(500, json={"error": "boom"})) as api:
            with pytest.raises(ServiceError) as exc_info:
                await api.tasks.list_tasks()

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_api(handler) as api:
            with pytest.raises(ServiceError):
                await api.ai.get_joke()

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        async with make_api(lambda r: httpx.Response(200, text="not json")) as api:
            with pytest.raises(ServiceError):
                await api.ai.chat("hi")

    @pytest.mark.asyncio
    async def test_missing_field(self):
        async with make_api(lambda r: httpx.Response(200, json={})) as api:
            with pytest.raises(ServiceError, match="tasks"):
                await api.tasks.list_tasks()

    @pytest.mark.asyncio
    async def test_non_object_body(self):
        async with make_api(lambda r: httpx.Response(200, json=[1, 2])) as api:
            with pytest.raises(ServiceError):
                await api.tasks.list_tasks()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"task": {"title": "buy milk"}},
        {"task": {"id": 1, "title": "buy milk", "dueDate": "soon"}},
        {"task": "created"},
    ])
    async def test_malformed_task(self, body):
        async with make_api(lambda r: httpx.Response(201, json=body)) as api:
            with pytest.raises(ServiceError, match="malformed"):
                await api.tasks.create_task(title="buy milk")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tasks", [[{"title": "no id"}], 7])
    async def test_malformed_task_list(self, tasks):
        async with make_api(lambda r: httpx.Response(200, json={"tasks": tasks})) as api:
            with pytest.raises(ServiceError, match="malformed"):
                await api.tasks.list_tasks()

    @pytest.mark.asyncio
    async def test_malformed_record_amount(self):
        body = {"record": {"id": 3, "type": "expense", "amount": "lots"}}
        async with make_api(lambda r: httpx.Response(201, json=body)) as api:
            with pytest.raises(ServiceError, match="malformed"):
                await api.finance.create_record("expense", 12.0, "coffee")
