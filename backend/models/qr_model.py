# backend/models/qr_model.py
from typing import Optional

from pydantic import BaseModel, Field


class QRGenerateIn(BaseModel):
    """QR 產生器表單；整份 JSON 會被編進 QR"""
    partName:        str = Field(..., description="Part name (required)")
    partSubType:     Optional[str] = None
    materialNumber:  str = Field(..., description="Material number (required)")
    vendorLotNumber: Optional[str] = None
    dateOfSupply:    Optional[str] = None
    warrantyPeriod:  Optional[str] = None
