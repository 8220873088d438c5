# backend/services/qr_service.py
from __future__ import annotations

import io
import json
import re

import qrcode
from qrcode.constants import ERROR_CORRECT_H

from models.qr_model import QRGenerateIn


def make_qr_png(data: str, box_size: int = 10, border: int = 4) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_H,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def generator_payload(form: QRGenerateIn) -> str:
    # 與前端 JSON.stringify 相同的緊湊格式
    return json.dumps(form.model_dump(exclude_none=True), separators=(",", ":"), ensure_ascii=False)


def generator_filename(form: QRGenerateIn) -> str:
    stem = re.sub(r"\s", "_", form.partName) or "qrcode"
    return safe_filename(f"{stem}_{form.materialNumber}.png")


def safe_filename(name: str) -> str:
    """Content-Disposition 只接受 latin-1；其餘字元換成 _"""
    return re.sub(r"[^A-Za-z0-9._-]", "_", name)
