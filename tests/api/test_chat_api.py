"""
Test suite for the chat endpoint.

Covers the error envelope, the JSON response shape, the streaming body
with its session announcement line and history lookup.

System role: Verification of the chat HTTP contract
"""

import uuid
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from kbchat.api.routers.router_utils import stream_with_sentinel
from kbchat.core.exceptions import CompletionFailed, ProviderError
from tests.fakes import TENANT_A, TENANT_B, FakeProvider

CHAT_URL = "/api/v1/chat"


def chat_body(widget_id: str, message: str = "What are your hours?", **overrides) -> dict:
    body = {"message": message, "tenantId": TENANT_A, "widgetId": widget_id}
    body.update(overrides)
    return body


class TestChatValidation:
    def test_missing_fields_should_return_400(self, client: TestClient) -> None:
        response = client.post(CHAT_URL, json={"message": "Hi"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Missing required fields: tenantId, widgetId"}

    def test_blank_message_should_return_400(self, client: TestClient, widget_id: str) -> None:
        response = client.post(CHAT_URL, json=chat_body(widget_id, message="   "))

        assert response.status_code == 400
        assert "message" in response.json()["error"]

    def test_malformed_body_should_return_400_envelope(self, client: TestClient) -> None:
        response = client.post(CHAT_URL, json={"message": "Hi", "stream": "maybe"})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_unknown_widget_should_return_404(self, client: TestClient) -> None:
        response = client.post(CHAT_URL, json=chat_body(str(uuid.uuid4())))

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Widget not found or inactive"}

    def test_widget_of_other_tenant_should_return_404(self, client: TestClient, widget_id: str) -> None:
        response = client.post(CHAT_URL, json=chat_body(widget_id, tenantId=TENANT_B))

        assert response.status_code == 404

    def test_unknown_session_should_answer_in_new_session(self, client: TestClient, widget_id: str) -> None:
        stale_id = str(uuid.uuid4())

        response = client.post(CHAT_URL, json=chat_body(widget_id, sessionId=stale_id, stream=False))

        assert response.status_code == 200
        assert response.json()["response"] == "Happy to help with that."
        assert response.json()["sessionId"] != stale_id

    def test_unknown_session_stream_should_announce_new_session(self, client: TestClient, widget_id: str) -> None:
        stale_id = str(uuid.uuid4())

        response = client.post(CHAT_URL, json=chat_body(widget_id, sessionId=stale_id))

        assert response.status_code == 200
        session_id = response.headers["x-session-id"]
        assert session_id != stale_id
        assert response.text == f"SESSION_ID:{session_id}\nHappy to help with that."


class TestChatJson:
    def test_non_streaming_response_shape(self, client: TestClient, widget_id: str) -> None:
        # Act
        response = client.post(CHAT_URL, json=chat_body(widget_id, stream=False))

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["response"] == "Happy to help with that."
        assert uuid.UUID(data["sessionId"])
        assert data["relevantSources"] == []

    def test_sources_should_carry_filename_and_score(self, client: TestClient, widget_id: str) -> None:
        client.post(
            "/api/v1/knowledge-base/documents",
            files={"file": ("hours.txt", b"Our opening hours are 9 to 5.", "text/plain")},
            headers={"X-Tenant-ID": TENANT_A},
        )

        response = client.post(CHAT_URL, json=chat_body(widget_id, message="What are your hours?", stream=False))

        sources = response.json()["relevantSources"]
        assert len(sources) == 1
        assert sources[0]["filename"] == "hours.txt"
        assert sources[0]["similarityScore"] == pytest.approx(1.0)

    def test_model_failure_should_return_500_envelope(
        self, client: TestClient, widget_id: str, fake_provider: FakeProvider
    ) -> None:
        with patch.object(fake_provider, "chat_complete", side_effect=ProviderError("model down")):
            response = client.post(CHAT_URL, json=chat_body(widget_id, stream=False))

        assert response.status_code == 500
        assert response.json()["success"] is False


class TestChatStreaming:
    def test_new_session_stream_should_start_with_session_line(self, client: TestClient, widget_id: str) -> None:
        # Act
        response = client.post(CHAT_URL, json=chat_body(widget_id))

        # Assert
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        session_id = response.headers["x-session-id"]
        assert response.text == f"SESSION_ID:{session_id}\nHappy to help with that."
        assert response.text.count("SESSION_ID:") == 1

    def test_existing_session_stream_should_have_no_session_line(self, client: TestClient, widget_id: str) -> None:
        first = client.post(CHAT_URL, json=chat_body(widget_id, stream=False)).json()

        response = client.post(CHAT_URL, json=chat_body(widget_id, message="And on Sunday?", sessionId=first["sessionId"]))

        assert response.status_code == 200
        assert response.text == "Happy to help with that."
        assert response.headers["x-session-id"] == first["sessionId"]

    def test_failure_before_first_token_should_return_json_500(
        self, client: TestClient, widget_id: str, fake_provider: FakeProvider
    ) -> None:
        async def failing_stream(messages):
            raise ProviderError("model down")
            yield

        with patch.object(fake_provider, "chat_complete_stream", side_effect=failing_stream):
            response = client.post(CHAT_URL, json=chat_body(widget_id))

        assert response.status_code == 500
        assert response.json()["success"] is False

    def test_streamed_answer_should_be_stored(self, client: TestClient, widget_id: str) -> None:
        response = client.post(CHAT_URL, json=chat_body(widget_id, message="Hi"))
        session_id = response.headers["x-session-id"]

        history = client.get(f"{CHAT_URL}/sessions/{session_id}", params={"tenantId": TENANT_A})

        assert history.status_code == 200
        data = history.json()
        assert data["total"] == 2
        assert [m["role"] for m in data["messages"]] == ["user", "assistant"]


class TestStreamWithSentinel:
    """Chunk framing, checked on the generator itself."""

    @staticmethod
    async def _tokens(*values: str):
        for value in values:
            yield value

    @pytest.mark.asyncio
    async def test_first_chunk_should_be_exactly_the_session_line(self) -> None:
        tokens = self._tokens("world")

        chunks = [c async for c in stream_with_sentinel(tokens, "Hello ", "abc-123", is_new_session=True)]

        assert chunks == ["SESSION_ID:abc-123\n", "Hello ", "world"]

    @pytest.mark.asyncio
    async def test_existing_session_should_not_be_announced(self) -> None:
        chunks = [c async for c in stream_with_sentinel(self._tokens(), "Hi", "abc-123", is_new_session=False)]

        assert chunks == ["Hi"]

    @pytest.mark.asyncio
    async def test_closing_early_should_close_upstream(self) -> None:
        closed = []

        async def upstream():
            try:
                while True:
                    yield "token"
            finally:
                closed.append(True)

        tokens = upstream()
        first = await tokens.__anext__()
        framed = stream_with_sentinel(tokens, first, "abc-123", is_new_session=True)
        await framed.__anext__()
        await framed.aclose()

        assert closed == [True]

    @pytest.mark.asyncio
    async def test_mid_stream_failure_should_propagate(self) -> None:
        async def upstream():
            yield "partial"
            raise CompletionFailed("broken")

        tokens = upstream()
        first = await tokens.__anext__()

        with pytest.raises(CompletionFailed):
            async for _ in stream_with_sentinel(tokens, first, "abc-123", is_new_session=False):
                pass


class TestChatHistoryEndpoint:
    def test_unknown_session_should_return_404(self, client: TestClient) -> None:
        response = client.get(f"{CHAT_URL}/sessions/{uuid.uuid4()}", params={"tenantId": TENANT_A})

        assert response.status_code == 404

    def test_other_tenant_should_get_404(self, client: TestClient, widget_id: str) -> None:
        session_id = client.post(CHAT_URL, json=chat_body(widget_id, stream=False)).json()["sessionId"]

        response = client.get(f"{CHAT_URL}/sessions/{session_id}", params={"tenantId": TENANT_B})

        assert response.status_code == 404
