"""
Unit tests for report summary composition and summarizer backends
"""
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import requests

from core.config import Settings
from core.errors import SummaryProviderError
from models.installation_model import Installation
from services.summary_service import (
    PART_DETAILS,
    MockSummarizer,
    OllamaSummarizer,
    OpenAISummarizer,
    build_summarizer,
    installation_summary_text,
    scan_summary_text,
)
from tests.helpers import installation_fields


def make_installation(**overrides) -> Installation:
    fields = installation_fields(**overrides)
    return Installation(**fields.model_dump(), id=1, uid="ERC-0001", timestamp=datetime.now())


class TestScanSummary:
    def test_known_code_uses_table(self):
        assert scan_summary_text("RC001") == PART_DETAILS["RC001"]
        assert "FlexGuard Corp" in scan_summary_text("PD045")

    def test_unknown_code_fallback_message(self):
        text = scan_summary_text("XYZ-42")
        assert "No detailed information available for part XYZ-42" in text
        assert "logged successfully" in text


class TestInstallationSummary:
    def test_contains_every_field(self):
        inst = make_installation()
        text = installation_summary_text(inst)

        for value in (
            inst.uid, inst.partName, inst.partSubType, inst.address,
            inst.dateOfCommencement, inst.manufacturerNumber, inst.vendorNumber,
            inst.batch, inst.dateOfSupply, inst.warranty, inst.qrCode,
        ):
            assert value in text
        assert "N/A" not in text
        assert text.endswith("This part appears to be in good condition based on the installation data.")

    def test_missing_fields_render_na(self):
        inst = make_installation(partSubType=None, warranty="", address="   ", batch=None)
        text = installation_summary_text(inst)

        assert f"Part Name: {inst.partName} (N/A)" in text
        assert "Installed at: N/A on 2024-02-01." in text
        assert "Batch No: N/A." in text
        assert "Warranty: N/A." in text


class TestMockSummarizer:
    @pytest.mark.asyncio
    async def test_artificial_delay_is_awaited(self):
        summarizer = MockSummarizer(delay_seconds=1.2)
        with patch("services.summary_service.asyncio.sleep", new_callable=AsyncMock) as sleep:
            summary = await summarizer.summarize_scan("RC001")

        sleep.assert_awaited_once_with(1.2)
        assert summary == PART_DETAILS["RC001"]

    @pytest.mark.asyncio
    async def test_zero_delay_skips_sleep(self):
        summarizer = MockSummarizer(delay_seconds=0)
        with patch("services.summary_service.asyncio.sleep", new_callable=AsyncMock) as sleep:
            summary = await summarizer.summarize_installation(make_installation())

        sleep.assert_not_awaited()
        assert summary.startswith("This is an AI-generated summary for part ERC-0001.")


class TestProviderSummarizers:
    @pytest.mark.asyncio
    async def test_openai_without_key_fails(self):
        summarizer = OpenAISummarizer(api_key=None, model="gpt-4o-mini")
        with pytest.raises(SummaryProviderError):
            await summarizer.summarize_installation(make_installation())

    @pytest.mark.asyncio
    async def test_openai_success(self):
        resp = MagicMock(status_code=200)
        resp.json.return_value = {"choices": [{"message": {"content": "  Part looks fine.  "}}]}
        summarizer = OpenAISummarizer(api_key="sk-test", model="gpt-4o-mini")

        with patch("services.summary_service.requests.post", return_value=resp) as post:
            summary = await summarizer.summarize_installation(make_installation())

        assert summary == "Part looks fine."
        assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer sk-test"

    @pytest.mark.asyncio
    async def test_openai_error_status(self):
        resp = MagicMock(status_code=429, text="rate limited")
        resp.json.return_value = {"error": {"message": "Rate limit reached"}}
        summarizer = OpenAISummarizer(api_key="sk-test", model="gpt-4o-mini")

        with patch("services.summary_service.requests.post", return_value=resp):
            with pytest.raises(SummaryProviderError, match="429"):
                await summarizer.summarize_scan("UNKNOWN-1")

    @pytest.mark.asyncio
    async def test_ollama_timeout(self):
        summarizer = OllamaSummarizer(url="http://ollama.local/api/generate", model="llama3", timeout=1)
        with patch(
            "services.summary_service.requests.post",
            side_effect=requests.exceptions.Timeout("slow"),
        ):
            with pytest.raises(SummaryProviderError, match="timed out"):
                await summarizer.summarize_installation(make_installation())

    @pytest.mark.asyncio
    async def test_ollama_strips_thinking(self):
        resp = MagicMock()
        resp.raise_for_status.return_value = None
        resp.json.return_value = {"response": "<think>hmm</think>Clip installed and in good condition."}
        summarizer = OllamaSummarizer(url="http://ollama.local/api/generate", model="llama3")

        with patch("services.summary_service.requests.post", return_value=resp):
            summary = await summarizer.summarize_installation(make_installation())

        assert summary == "Clip installed and in good condition."

    @pytest.mark.asyncio
    async def test_known_scan_code_skips_provider(self):
        summarizer = OllamaSummarizer(url="http://ollama.local/api/generate", model="llama3")
        with patch("services.summary_service.requests.post") as post:
            summary = await summarizer.summarize_scan("QR987")

        post.assert_not_called()
        assert summary == PART_DETAILS["QR987"]


class TestBuildSummarizer:
    @pytest.mark.parametrize(
        "backend, cls",
        [("mock", MockSummarizer), ("openai", OpenAISummarizer), ("ollama", OllamaSummarizer), ("bogus", MockSummarizer)],
    )
    def test_backend_selection(self, backend, cls):
        assert isinstance(build_summarizer(Settings(SUMMARIZER_BACKEND=backend)), cls)
