# backend/models/inventory_model.py
from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

WarrantyStatus = Literal["Active", "Expiring Soon", "Expired"]


class WarrantyInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    status:        WarrantyStatus
    daysRemaining: Optional[int] = None
    expiryDate:    Optional[date] = None


# -------- /inventory 列表 --------
class InventoryItem(BaseModel):
    id:                 int
    uid:                str
    partName:           Optional[str] = None
    partSubType:        Optional[str] = None
    address:            Optional[str] = None
    dateOfCommencement: Optional[str] = None
    warranty:           Optional[str] = None
    warrantyInfo:       WarrantyInfo


__all__ = ["WarrantyStatus", "WarrantyInfo", "InventoryItem"]
