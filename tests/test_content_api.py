# Content API Tests
"""Tests for the /content and /internalcontent endpoints."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from content_unroller.deps import get_unroller
from content_unroller.errors import ContentReaderError, ConversionError, ValidationError
from content_unroller.main import app

CONTENT_UUID = "22c0d426-1466-11e7-b0c1-37e417ee6c76"
CONTENT = {
    "id": f"http://www.ft.com/thing/{CONTENT_UUID}",
    "type": "http://www.ft.com/ontology/content/Article",
    "bodyXML": "<body><p>Text</p></body>",
}


@pytest.fixture
def unroller():
    """Dispatcher double installed as the app's unroller."""
    mock = MagicMock()
    mock.unroll = AsyncMock(return_value={**CONTENT, "embeds": []})
    mock.unroll_internal = AsyncMock(return_value={**CONTENT, "leadImages": []})
    app.dependency_overrides[get_unroller] = lambda: mock
    return mock


class TestContentEndpoint:
    """Test POST /content."""

    def test_unrolls_content(self, client, unroller):
        response = client.post("/content", json=CONTENT, headers={"X-Request-Id": "tid_fromcaller"})

        assert response.status_code == 200
        assert response.json() == {**CONTENT, "embeds": []}
        assert response.headers["X-Request-Id"] == "tid_fromcaller"

        event = unroller.unroll.await_args.args[0]
        assert event.uuid == CONTENT_UUID
        assert event.transaction_id == "tid_fromcaller"
        assert event.content == CONTENT

    def test_generates_transaction_id(self, client, unroller):
        response = client.post("/content", json=CONTENT)

        tid = response.headers["X-Request-Id"]
        assert tid.startswith("tid_")
        assert len(tid) == len("tid_") + 10
        assert unroller.unroll.await_args.args[0].transaction_id == tid

    def test_invalid_json(self, client, unroller):
        response = client.post("/content", content=b"{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Error expanding content, supplied UUID is invalid")
        unroller.unroll.assert_not_awaited()

    def test_body_not_an_object(self, client, unroller):
        response = client.post("/content", json=[CONTENT])
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "body",
        [
            {"type": "http://www.ft.com/ontology/content/Article"},
            {"id": "http://www.ft.com/thing/not-a-uuid"},
            {"id": 12345},
        ],
    )
    def test_missing_or_invalid_id(self, client, unroller, body):
        response = client.post("/content", content=json.dumps(body))

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Error expanding content, supplied UUID is invalid")
        unroller.unroll.assert_not_awaited()

    def test_validation_error_is_bad_request(self, client, unroller):
        unroller.unroll.side_effect = ValidationError(content=CONTENT)

        response = client.post("/content", json=CONTENT)

        assert response.status_code == 400
        assert response.json()["detail"] == "Error expanding content, supplied UUID is invalid: invalid content"

    @pytest.mark.parametrize(
        "error",
        [ContentReaderError("store down", content=CONTENT), ConversionError()],
    )
    def test_downstream_errors_are_server_errors(self, client, unroller, error):
        unroller.unroll.side_effect = error

        response = client.post("/content", json=CONTENT)

        assert response.status_code == 500
        assert response.json()["detail"].startswith(f"Error expanding content for: {CONTENT_UUID}: ")


class TestInternalContentEndpoint:
    """Test POST /internalcontent."""

    def test_unrolls_internal_content(self, client, unroller):
        response = client.post("/internalcontent", json=CONTENT)

        assert response.status_code == 200
        assert response.json() == {**CONTENT, "leadImages": []}
        unroller.unroll_internal.assert_awaited_once()
        unroller.unroll.assert_not_awaited()

    def test_validation_error_is_bad_request(self, client, unroller):
        unroller.unroll_internal.side_effect = ValidationError(content=CONTENT)
        response = client.post("/internalcontent", json=CONTENT)
        assert response.status_code == 400
