# Test Configuration
"""Pytest fixtures for Content Unroller tests."""

import copy
from unittest.mock import AsyncMock, MagicMock

import pytest

from content_unroller.models.content import UnrollEvent
from content_unroller.services.content_reader import ContentReader
from content_unroller.services.uuid_utils import extract_uuid

API_HOST = "api.ft.com"


def _store_lookup(store):
    async def lookup(uuids, transaction_id):
        return {u: copy.deepcopy(store[u]) for u in uuids if u in store}

    return lookup


@pytest.fixture
def api_host():
    """Host used for placeholder ids."""
    return API_HOST


@pytest.fixture
def make_reader():
    """
    Build a content reader double backed by in-memory stores.

    Every call returns fresh copies so unrollers can mutate what they get.
    """

    def _make(store=None, internal_store=None):
        reader = MagicMock(spec=ContentReader)
        reader.get = AsyncMock(side_effect=_store_lookup(store or {}))
        reader.get_internal = AsyncMock(side_effect=_store_lookup(internal_store or {}))
        return reader

    return _make


@pytest.fixture
def make_event():
    """Build an unroll event for a document, deriving the UUID from its id."""

    def _make(content, transaction_id="tid_test123456"):
        return UnrollEvent(
            content=content,
            transaction_id=transaction_id,
            uuid=extract_uuid(content["id"]),
        )

    return _make


@pytest.fixture
def placeholder(api_host):
    """Placeholder record for content that could not be fetched."""

    def _make(uuid):
        return {"id": f"http://{api_host}/content/{uuid}"}

    return _make


@pytest.fixture
def client():
    """Test client; dependency overrides are cleared afterwards."""
    from fastapi.testclient import TestClient

    from content_unroller.main import app

    yield TestClient(app)
    app.dependency_overrides.clear()
