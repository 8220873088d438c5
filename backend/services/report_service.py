# backend/services/report_service.py
"""
One report-creation path for both sources:
  ScanSource          raw scanned value (+ optional uploaded photo)
  InstallationSource  uid of an existing installation (photo copied from it)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from core.db import RecordStore
from core.errors import InstallationNotFoundError, ValidationError
from models.report_model import Report
from services.summary_service import Summarizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanSource:
    qr_data: str
    photo: Optional[str] = None


@dataclass(frozen=True)
class InstallationSource:
    uid: Optional[str]


ReportSource = Union[ScanSource, InstallationSource]


async def create_report(store: RecordStore, summarizer: Summarizer, source: ReportSource) -> Report:
    if isinstance(source, InstallationSource):
        if not source.uid or not source.uid.strip():
            raise ValidationError("UID is required")

        installation = store.find_installation_by_uid(source.uid)
        if installation is None:
            raise InstallationNotFoundError(source.uid)

        summary = await summarizer.summarize_installation(installation)
        return await store.create_report(source.uid, summary, installation.photo)

    logger.info("Received scan report request for: %s", source.qr_data)
    if source.photo:
        logger.info("Photo evidence attached: %s", source.photo)
    summary = await summarizer.summarize_scan(source.qr_data)
    return await store.create_report(source.qr_data, summary, source.photo)
