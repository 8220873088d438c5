"""QR generator – prefix=/api"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Response

from core.deps import http_exc
from models.qr_model import QRGenerateIn
from services.qr_service import generator_filename, generator_payload, make_qr_png

logger = logging.getLogger(__name__)
router = APIRouter(tags=["qr"])


@router.post("/qr-codes")
def generate_qr(form: QRGenerateIn):
    """表單整份 JSON 編進 QR，回傳 PNG 下載"""
    if not form.partName.strip():
        raise http_exc(400, "Part Name is required.")
    if not form.materialNumber.strip():
        raise http_exc(400, "Material Number is required.")

    png = make_qr_png(generator_payload(form))
    filename = generator_filename(form)
    logger.info("QR code generated: %s", filename)
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
