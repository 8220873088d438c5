# backend/services/pdf_report.py - Material Inspection Report (PDF)
"""
ReportDocument 依固定順序附加區塊，最後一次序列化成 bytes：

  header images + ministry title → report title → subject →
  inspection summary → verification notes → authorized by → [photo page]

每個 add_* 回傳 True/False；失敗的區塊只記 log，文件照樣完成。
"""
from __future__ import annotations

import asyncio
import io
import logging
from typing import Dict, Iterator, Optional, Tuple
from xml.sax.saxutils import escape

from PIL import Image as PILImage
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import (
    Image,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from core.config import settings
from models.installation_model import Installation
from models.report_model import Report
from services.image_fetcher import ImageFetcher
from services.qr_service import safe_filename
from services.summary_service import na
from services.upload_service import resolve_upload

logger = logging.getLogger(__name__)

PAGE_MARGIN = 50
HEADER_IMAGE_WIDTH = 50
PHOTO_BOX = (400, 300)
LINE = 14  # 12pt 字 + 行距
STREAM_CHUNK = 64 * 1024


def _styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "ministry": ParagraphStyle(
            "Ministry", parent=base["Normal"], fontName="Helvetica-Bold",
            fontSize=16, leading=20, alignment=TA_CENTER,
        ),
        "title": ParagraphStyle(
            "ReportTitle", parent=base["Normal"], fontName="Helvetica-Bold",
            fontSize=18, leading=22, alignment=TA_CENTER, spaceBefore=LINE, spaceAfter=LINE * 1.5,
        ),
        "heading": ParagraphStyle(
            "SectionHeading", parent=base["Normal"], fontName="Helvetica-Bold",
            fontSize=12, leading=LINE, spaceAfter=LINE * 0.5,
        ),
        "photo_heading": ParagraphStyle(
            "PhotoHeading", parent=base["Normal"], fontName="Helvetica-Bold",
            fontSize=14, leading=18, spaceAfter=LINE,
        ),
        "body": ParagraphStyle(
            "Body", parent=base["Normal"], fontName="Helvetica", fontSize=12, leading=LINE,
        ),
        "error": ParagraphStyle(
            "Error", parent=base["Normal"], fontName="Helvetica", fontSize=12,
            leading=LINE, textColor=colors.red,
        ),
    }


def fit_size(width: float, height: float, box: Tuple[float, float] = PHOTO_BOX) -> Tuple[float, float]:
    """等比縮放進 box（可放大）"""
    if width <= 0 or height <= 0:
        raise ValueError(f"invalid image size {width}x{height}")
    scale = min(box[0] / width, box[1] / height)
    return width * scale, height * scale


def decode_image(src) -> Tuple[io.BytesIO, int, int]:
    """
    完整解碼一次（不只讀 header），截斷或損毀的檔案在這裡就會拋錯，
    不會拖到 doc.build() 才炸掉整份文件。回傳重新編碼的 PNG 與原始尺寸。
    """
    with PILImage.open(src) as img:
        img.load()
        if img.mode not in ("RGB", "RGBA", "L"):
            img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
        out = io.BytesIO()
        img.save(out, format="PNG")
        width, height = img.size
    out.seek(0)
    return out, width, height


def inspection_fields(report: Report, installation: Optional[Installation]) -> Dict[str, Optional[str]]:
    inst = installation
    return {
        "Product": inst.partName if inst else None,
        "Specification": inst.partSubType if inst else None,
        "Vendor Lot Number": inst.batch if inst else None,
        "Date of Supply": inst.dateOfSupply if inst else None,
        "Warranty Period": inst.warranty if inst else None,
        "Inspection Date": report.timestamp.strftime("%m/%d/%Y"),
    }


def report_filename(report: Report) -> str:
    return safe_filename(f"material-inspection-report-{report.qrData}.pdf")


class ReportDocument:
    def __init__(self, title: str = "Material Inspection Report"):
        self.title = title
        self.styles = _styles()
        self._story: list = []

    def _para(self, text: str, style: str) -> Paragraph:
        return Paragraph(escape(text), self.styles[style])

    # ────────────── sections ──────────────
    def add_header(self, emblem: bytes, logo: bytes) -> bool:
        try:
            images = []
            for data in (emblem, logo):
                png, w, h = decode_image(io.BytesIO(data))
                images.append(Image(png, width=HEADER_IMAGE_WIDTH,
                                    height=HEADER_IMAGE_WIDTH * h / w))
        except Exception as e:
            logger.warning("Header images could not be embedded: %s", e)
            return False

        titles = [
            self._para("GOVERNMENT OF INDIA", "ministry"),
            self._para("MINISTRY OF RAILWAYS", "ministry"),
        ]
        usable = LETTER[0] - 2 * PAGE_MARGIN
        table = Table(
            [[images[0], titles, images[1]]],
            colWidths=[HEADER_IMAGE_WIDTH, usable - 2 * HEADER_IMAGE_WIDTH, HEADER_IMAGE_WIDTH],
        )
        table.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ]))
        self._story += [table, Spacer(1, LINE * 2.5)]
        return True

    def add_error_line(self, message: str) -> bool:
        self._story += [self._para(message, "body"), Spacer(1, LINE)]
        return True

    def add_report_title(self) -> bool:
        self._story.append(self._para("MATERIAL INSPECTION REPORT", "title"))
        return True

    def add_subject(self, part_name: Optional[str]) -> bool:
        self._story += [self._para(f"Subject: {na(part_name)}", "heading"), Spacer(1, LINE * 0.5)]
        return True

    def add_inspection_summary(self, fields: Dict[str, Optional[str]]) -> bool:
        self._story.append(self._para("Inspection Summary:", "heading"))
        for label, value in fields.items():
            self._story.append(self._para(f"- {label}: {na(value)}", "body"))
        self._story.append(Spacer(1, LINE * 2))
        return True

    def add_verification_notes(self) -> bool:
        # 留白給人工備註
        self._story += [self._para("Verification Notes:", "heading"), Spacer(1, LINE * 9)]
        return True

    def add_authorization(self) -> bool:
        self._story += [
            self._para("Authorized By:", "heading"),
            Spacer(1, LINE * 3),
            self._para("(Inspector’s Name, Designation, and Signature)", "heading"),
        ]
        return True

    def add_photo_page(self, photo_path: str) -> bool:
        self._story += [PageBreak(), Paragraph("<u>Attached Photo:</u>", self.styles["photo_heading"])]
        try:
            png, w, h = decode_image(photo_path)
            fw, fh = fit_size(w, h)
            self._story.append(Image(png, width=fw, height=fh, hAlign="CENTER"))
            return True
        except Exception as e:
            logger.warning("Could not attach photo to PDF: %s", e)
            self._story.append(self._para("Could not load attached photo.", "error"))
            return False

    # ────────────── serialize ──────────────
    def build(self) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=LETTER,
            leftMargin=PAGE_MARGIN, rightMargin=PAGE_MARGIN,
            topMargin=PAGE_MARGIN, bottomMargin=PAGE_MARGIN,
            title=self.title,
        )
        doc.build(self._story)
        return buffer.getvalue()


def _fallback_pdf(message: str) -> bytes:
    doc = ReportDocument()
    doc.add_error_line(message)
    return doc.build()


async def render_report_pdf(
    report: Report,
    installation: Optional[Installation],
    fetcher: ImageFetcher,
    emblem_url: str = settings.HEADER_EMBLEM_URL,
    logo_url: str = settings.HEADER_LOGO_URL,
) -> bytes:
    """Header 圖片抓取失敗或照片讀不到都不會中止；永遠回傳完整 PDF"""
    doc = ReportDocument()

    results = await asyncio.gather(
        fetcher.fetch_async(emblem_url),
        fetcher.fetch_async(logo_url),
        return_exceptions=True,
    )
    for r in results:
        if isinstance(r, BaseException) and not isinstance(r, Exception):
            raise r

    failure = next((r for r in results if isinstance(r, Exception)), None)
    if failure is not None:
        logger.warning("Header image fetch failed for report %s: %s", report.id, failure)
        doc.add_error_line(f"An error occurred while generating the report: {failure}")
    elif not await asyncio.to_thread(doc.add_header, results[0], results[1]):
        doc.add_error_line("An error occurred while generating the report: header images could not be embedded")

    doc.add_report_title()
    doc.add_subject(installation.partName if installation else None)
    doc.add_inspection_summary(inspection_fields(report, installation))
    doc.add_verification_notes()
    doc.add_authorization()
    if report.photo:
        # 解碼 + 版面排版都是 CPU / 磁碟工作，丟到 worker thread
        await asyncio.to_thread(doc.add_photo_page, str(resolve_upload(report.photo)))

    try:
        return await asyncio.to_thread(doc.build)
    except Exception as e:
        logger.exception("Could not generate PDF for report %s", report.id)
        return await asyncio.to_thread(
            _fallback_pdf, f"An error occurred while generating the report: {e}"
        )


def iter_pdf_chunks(data: bytes, chunk_size: int = STREAM_CHUNK) -> Iterator[bytes]:
    for start in range(0, len(data), chunk_size):
        yield data[start:start + chunk_size]


__all__ = [
    "ReportDocument", "render_report_pdf", "iter_pdf_chunks",
    "inspection_fields", "report_filename", "fit_size", "decode_image",
]
