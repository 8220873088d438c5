"""Reports REST router – prefix=/api"""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import StreamingResponse

from core.db import RecordStore
from core.deps import from_domain, get_image_fetcher, get_store, get_summarizer
from core.errors import RailQRError, ReportNotFoundError
from models.report_model import GenerateReportIn, GenerateReportOut, Report, ScanReportOut
from services.image_fetcher import ImageFetcher
from services.pdf_report import iter_pdf_chunks, render_report_pdf, report_filename
from services.report_service import InstallationSource, ScanSource, create_report
from services.summary_service import Summarizer
from services.upload_service import save_upload

logger = logging.getLogger(__name__)
router = APIRouter(tags=["reports"])


# ① 由 installation UID 產生報告 ----------------------------------
@router.post("/generate-report", response_model=GenerateReportOut)
async def generate_report(
    payload: Optional[GenerateReportIn] = None,
    store: RecordStore = Depends(get_store),
    summarizer: Summarizer = Depends(get_summarizer),
):
    uid = payload.uid if payload else None
    try:
        record = await create_report(store, summarizer, InstallationSource(uid))
    except RailQRError as e:
        raise from_domain(e)
    except Exception as e:
        logger.exception(f"Error generating report: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate report")

    return {
        "id": record.id,
        "title": f"AI Summary for {record.qrData}",
        "content": record.summary,
        "photo": record.photo,
    }


# ② 任意掃描值（可附照片）---------------------------------------
@router.post("/scan-report", response_model=ScanReportOut)
async def scan_report(
    qrData: str = Form(""),
    photo: UploadFile | None = File(None),
    store: RecordStore = Depends(get_store),
    summarizer: Summarizer = Depends(get_summarizer),
):
    try:
        photo_path = await save_upload(photo)
        record = await create_report(store, summarizer, ScanSource(qrData, photo_path))
    except RailQRError as e:
        raise from_domain(e)
    except Exception as e:
        logger.exception(f"Error generating report: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate report")

    return {"summary": record.summary, "photo": record.photo, "id": record.id}


# ③ 列表（新到舊）------------------------------------------------
@router.get("/reports", response_model=List[Report])
def list_reports(store: RecordStore = Depends(get_store)):
    return store.list_reports()


# ④ 下載 PDF -----------------------------------------------------
@router.get("/download-report/{report_id}")
async def download_report(
    report_id: int,
    store: RecordStore = Depends(get_store),
    fetcher: ImageFetcher = Depends(get_image_fetcher),
):
    report = store.find_report_by_id(report_id)
    if not report:
        raise from_domain(ReportNotFoundError(report_id))

    installation = store.find_installation_by_uid(report.qrData)
    pdf_bytes = await render_report_pdf(report, installation, fetcher)
    logger.info("📄 Report %s rendered (%d bytes)", report.id, len(pdf_bytes))

    return StreamingResponse(
        iter_pdf_chunks(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={report_filename(report)}"},
    )
