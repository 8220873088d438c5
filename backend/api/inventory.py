"""Inventory / warranty status – prefix=/api"""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from core.db import RecordStore
from core.deps import get_store
from models.inventory_model import InventoryItem
from services.warranty_service import inventory_item, warranty_alerts

router = APIRouter(prefix="/inventory", tags=["inventory"])


# ① 全部 installations + 保固狀態（新到舊）-------------------------
@router.get("", response_model=List[InventoryItem])
def list_inventory(store: RecordStore = Depends(get_store)):
    return [inventory_item(inst) for inst in store.list_installations()]


# ② 只列 Expiring Soon / Expired ----------------------------------
@router.get("/warranty-alerts", response_model=List[InventoryItem])
def list_warranty_alerts(store: RecordStore = Depends(get_store)):
    return warranty_alerts(store.list_installations())
