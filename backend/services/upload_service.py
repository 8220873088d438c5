# backend/services/upload_service.py
from __future__ import annotations

import logging
import secrets
from pathlib import Path, PurePosixPath

from fastapi import UploadFile

from core.config import settings
from core.errors import ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 每次讀 1MB
UPLOAD_MOUNT = "uploads"  # main.py 以 /uploads 提供靜態檔


def public_path(name: str) -> str:
    """記錄裡存的是 "uploads/<name>"，與靜態路徑一致，不含實際目錄"""
    return f"{UPLOAD_MOUNT}/{name}"


def resolve_upload(stored: str, upload_dir: str | None = None) -> Path:
    """record.photo → 磁碟路徑；"uploads/..." 對應到 UPLOAD_DIR，其餘原樣"""
    parts = PurePosixPath(stored).parts
    if len(parts) > 1 and parts[0] == UPLOAD_MOUNT:
        return Path(upload_dir or settings.UPLOAD_DIR).joinpath(*parts[1:])
    return Path(stored)


async def save_upload(
    file: UploadFile | None,
    upload_dir: str | None = None,
    max_bytes: int | None = None,
) -> str | None:
    """
    串流寫入上傳目錄，回傳 "uploads/<name>"；沒有檔案回傳 None。
    檔案不會被清理（無保留政策）。
    """
    if file is None or not file.filename:
        return None

    target_dir = Path(upload_dir or settings.UPLOAD_DIR)
    limit = max_bytes if max_bytes is not None else settings.MAX_UPLOAD_BYTES
    target_dir.mkdir(parents=True, exist_ok=True)

    dest = target_dir / f"{secrets.token_hex(16)}{Path(file.filename).suffix.lower()}"
    total = 0
    try:
        with open(dest, "wb") as out:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                total += len(chunk)
                if total > limit:
                    raise ValidationError(f"File size exceeds {limit // (1024 * 1024)}MB limit")
                out.write(chunk)
    except Exception:
        dest.unlink(missing_ok=True)
        raise

    logger.info("Stored upload %s -> %s (%d bytes)", file.filename, dest, total)
    return public_path(dest.name)
