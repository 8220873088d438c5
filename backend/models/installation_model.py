# backend/models/installation_model.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


# -------- 表單欄位（multipart 送入，皆為自由字串）--------
class InstallationFields(BaseModel):
    partName:           Optional[str] = None
    partSubType:        Optional[str] = None
    manufacturerNumber: Optional[str] = None
    batch:              Optional[str] = None
    vendorNumber:       Optional[str] = None
    warranty:           Optional[str] = None
    address:            Optional[str] = None
    dateOfSupply:       Optional[str] = None
    dateOfCommencement: Optional[str] = None
    qrCode:             Optional[str] = None


# -------- 已入庫記錄（建立後不可變）--------
class Installation(InstallationFields):
    model_config = ConfigDict(frozen=True)

    id:        int
    uid:       str
    photo:     Optional[str] = None
    timestamp: datetime


class InstallationCreated(BaseModel):
    message: str
    record:  Installation


# -------- /parts/{uid} 投影 --------
class SleeperInfo(BaseModel):
    location: Optional[str] = None
    uid:      str = "N/A"
    batch:    str = "N/A"


class InstallEvent(BaseModel):
    date:      Optional[str] = None
    installer: str = "N/A"
    location:  Optional[str] = None
    reason:    str = "New Installation"


class PartDetail(BaseModel):
    uid:            str
    type:           Optional[str] = None
    manufacturer:   str
    batch:          str
    mfgDate:        Optional[str] = None
    status:         str = "Installed"
    warranty:       Optional[str] = None
    sleeper:        SleeperInfo
    installHistory: List[InstallEvent]
    specifications: Dict[str, Optional[str]]


__all__ = [
    "InstallationFields", "Installation", "InstallationCreated",
    "SleeperInfo", "InstallEvent", "PartDetail",
]
