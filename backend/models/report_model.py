# backend/models/report_model.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Report(BaseModel):
    """qrData 為原始掃描值或 installation uid（以值關聯，非外鍵）"""
    model_config = ConfigDict(frozen=True)

    id:        int
    qrData:    str
    summary:   str
    photo:     Optional[str] = None
    timestamp: datetime


# ── /generate-report ───────────────────────────────────────────────
class GenerateReportIn(BaseModel):
    uid: Optional[str] = None


class GenerateReportOut(BaseModel):
    id:      int
    title:   str
    content: str
    photo:   Optional[str] = None


# ── /scan-report ───────────────────────────────────────────────────
class ScanReportOut(BaseModel):
    summary: str
    photo:   Optional[str] = None
    id:      int
