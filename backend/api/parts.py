"""Part lookup / QR / catalogue – prefix=/api"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from core.db import RecordStore
from core.deps import get_store, http_exc
from models.installation_model import (
    InstallEvent,
    Installation,
    PartDetail,
    SleeperInfo,
)
from services.qr_service import make_qr_png, safe_filename

router = APIRouter(tags=["parts"])

PART_TYPES = [
    "Elastic Rail Clip",
    "Liner",
    "Sleeper",
    "Rail pad",
]

PART_SUBTYPES = {
    "Liner": [
        "Glass Filled Nylon Liners (GFN)",
        "Mild Steel Liners",
        "High Viscous Nylon-66 (HVN) Insulating Liner",
        "High Ribbed Metal Liners",
    ],
    "Sleeper": [
        "Wooden Sleeper",
        "Concrete Sleeper",
        "Steel Sleeper",
        "Cast Iron Sleeper",
    ],
}


def to_part_detail(inst: Installation) -> PartDetail:
    """Installation → QR 掃描頁使用的零件明細"""
    part_type = f"{inst.partName} ({inst.partSubType})" if inst.partSubType else inst.partName
    return PartDetail(
        uid=inst.uid,
        type=part_type,
        manufacturer=inst.manufacturerNumber or "(Not specified)",
        batch=inst.batch or "(Not specified)",
        mfgDate=inst.dateOfSupply,
        status="Installed",  # installations 內都視為已安裝
        warranty=inst.warranty,
        sleeper=SleeperInfo(location=inst.address),
        installHistory=[
            InstallEvent(date=inst.dateOfCommencement, location=inst.address),
        ],
        specifications={
            "QR Code": inst.qrCode or "N/A",
            "Manufacturer No.": inst.manufacturerNumber,
            "Vendor No.": inst.vendorNumber,
            "Date of Supply": inst.dateOfSupply,
        },
    )


@router.get("/parts/{uid}", response_model=PartDetail)
def get_part(uid: str, store: RecordStore = Depends(get_store)):
    inst = store.find_installation_by_uid(uid)
    if not inst:
        raise http_exc(404, "Part not found")
    return to_part_detail(inst)


@router.get("/parts/{uid}/qr")
def get_part_qr(uid: str, store: RecordStore = Depends(get_store)):
    """UID 本身編碼成 QR（PNG），可貼在零件上"""
    if not store.find_installation_by_uid(uid):
        raise http_exc(404, "Part not found")
    return Response(
        content=make_qr_png(uid),
        media_type="image/png",
        headers={"Content-Disposition": f"attachment; filename={safe_filename(uid)}.png"},
    )


@router.get("/part-types")
def part_types():
    return {"partTypes": PART_TYPES, "partSubTypes": PART_SUBTYPES}
