"""
core/deps.py ── FastAPI dependencies（store / fetcher / summarizer）與錯誤轉換
tests 以 app.dependency_overrides 替換
"""
from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import HTTPException

from core.db import RecordStore, record_store
from core.errors import RailQRError
from services.image_fetcher import ImageFetcher, image_fetcher
from services.summary_service import Summarizer, build_summarizer

logger = logging.getLogger(__name__)


def http_exc(code: int, detail: str) -> HTTPException:
    """統一的 HTTP 異常創建函數"""
    return HTTPException(status_code=code, detail=detail)


def from_domain(err: RailQRError) -> HTTPException:
    """domain error → HTTPException（400 / 404 / 502 …）"""
    if err.status_code >= 500:
        logger.error("Domain error surfaced as %d: %s", err.status_code, err.message)
    return http_exc(err.status_code, err.message)


def get_store() -> RecordStore:
    return record_store


def get_image_fetcher() -> ImageFetcher:
    return image_fetcher


@lru_cache(maxsize=1)
def get_summarizer() -> Summarizer:
    return build_summarizer()
