"""
Unit tests for report creation from scans and installations
"""
import pytest

from core.db import RecordStore
from core.errors import InstallationNotFoundError, ValidationError
from services.report_service import InstallationSource, ScanSource, create_report
from services.summary_service import MockSummarizer
from tests.helpers import installation_fields


@pytest.fixture
def summarizer():
    return MockSummarizer(delay_seconds=0)


class TestInstallationSource:
    @pytest.mark.asyncio
    async def test_unknown_uid_does_not_create_report(self, store: RecordStore, summarizer):
        with pytest.raises(InstallationNotFoundError) as exc:
            await create_report(store, summarizer, InstallationSource("ERC-0404"))

        assert "ERC-0404" in str(exc.value)
        assert store.reports.count() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("uid", [None, "", "   "])
    async def test_missing_uid(self, store: RecordStore, summarizer, uid):
        with pytest.raises(ValidationError, match="UID is required"):
            await create_report(store, summarizer, InstallationSource(uid))
        assert store.reports.count() == 0

    @pytest.mark.asyncio
    async def test_report_links_installation(self, store: RecordStore, summarizer):
        inst = await store.create_installation(installation_fields(partName="Liner"), photo="uploads/l.png")

        report = await create_report(store, summarizer, InstallationSource(inst.uid))

        assert report.id == 1
        assert report.qrData == "L-0001"
        assert report.photo == "uploads/l.png"
        assert "Part Name: Liner" in report.summary


class TestScanSource:
    @pytest.mark.asyncio
    async def test_scan_report(self, store: RecordStore, summarizer):
        report = await create_report(store, summarizer, ScanSource("PD045", photo="uploads/scan.jpg"))

        assert report.qrData == "PD045"
        assert report.photo == "uploads/scan.jpg"
        assert "Standard Rail Pad" in report.summary

    @pytest.mark.asyncio
    async def test_unknown_scan_still_logged(self, store: RecordStore, summarizer):
        report = await create_report(store, summarizer, ScanSource("ZZ-1"))

        assert "No detailed information available for part ZZ-1" in report.summary
        assert store.list_reports() == [report]
