"""Installations REST router – prefix=/api"""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from core.db import RecordStore
from core.deps import from_domain, get_store
from core.errors import RailQRError
from models.installation_model import Installation, InstallationCreated, InstallationFields
from services.upload_service import save_upload

logger = logging.getLogger(__name__)
router = APIRouter(tags=["installations"])


def installation_form(
    partName: Optional[str] = Form(None),
    partSubType: Optional[str] = Form(None),
    manufacturerNumber: Optional[str] = Form(None),
    batch: Optional[str] = Form(None),
    vendorNumber: Optional[str] = Form(None),
    warranty: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    dateOfSupply: Optional[str] = Form(None),
    dateOfCommencement: Optional[str] = Form(None),
    qrCode: Optional[str] = Form(None),
) -> InstallationFields:
    """multipart 欄位 → InstallationFields（不做必填檢查，由前端負責）"""
    return InstallationFields(
        partName=partName,
        partSubType=partSubType,
        manufacturerNumber=manufacturerNumber,
        batch=batch,
        vendorNumber=vendorNumber,
        warranty=warranty,
        address=address,
        dateOfSupply=dateOfSupply,
        dateOfCommencement=dateOfCommencement,
        qrCode=qrCode,
    )


# ① 新增安裝記錄（UID 由伺服器配發）--------------------------------
@router.post("/installations", response_model=InstallationCreated)
async def create_installation(
    fields: InstallationFields = Depends(installation_form),
    photo: UploadFile | None = File(None),
    store: RecordStore = Depends(get_store),
):
    try:
        photo_path = await save_upload(photo)
        if photo_path:
            logger.info("Photo evidence attached: %s", photo_path)
        record = await store.create_installation(fields, photo_path)
        return {"message": "Installation saved successfully", "record": record}
    except RailQRError as e:
        raise from_domain(e)
    except Exception as e:
        logger.exception(f"Error saving installation: {e}")
        raise HTTPException(status_code=500, detail="Failed to save installation")


# ② 列表（新到舊）------------------------------------------------
@router.get("/installations", response_model=List[Installation])
def list_installations(store: RecordStore = Depends(get_store)):
    return store.list_installations()
