"""
Rail QR backend - test configuration and fixtures
"""
import os
import tempfile

# 必須在 import app 之前設定
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="railqr-uploads-")
os.environ["SUMMARY_DELAY_SECONDS"] = "0"
os.environ["SUMMARIZER_BACKEND"] = "mock"

import pytest
from httpx import ASGITransport, AsyncClient

from main import app
from core.db import RecordStore
from core.deps import get_image_fetcher, get_store, get_summarizer
from services.summary_service import MockSummarizer
from tests.helpers import OfflineFetcher


@pytest.fixture
def store() -> RecordStore:
    """每個測試一個全新的 store"""
    return RecordStore()


@pytest.fixture
def fetcher() -> OfflineFetcher:
    return OfflineFetcher()


@pytest.fixture
async def client(store: RecordStore, fetcher):
    """Test client with store / fetcher / summarizer overrides"""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_image_fetcher] = lambda: fetcher
    app.dependency_overrides[get_summarizer] = lambda: MockSummarizer(delay_seconds=0)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
