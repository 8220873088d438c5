"""Dashboard REST router – prefix=/api"""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from core.db import RecordStore
from core.deps import get_store
from models.dashboard_model import ActivityEntry, DashboardStat
from services.summary_service import na

router = APIRouter(tags=["dashboard"])

RECENT_LIMIT = 5


@router.get("/dashboard-stats", response_model=List[DashboardStat])
def dashboard_stats(store: RecordStore = Depends(get_store)):
    total_parts = store.installations.count()
    active = total_parts          # 目前全部視為 active
    pending_replacements = 0      # 尚無資料
    system_efficiency = "100%"    # 尚無資料

    return [
        {
            "title": "Total Parts",
            "value": total_parts,
            "description": "All tracked components",
            "icon": "Package",
            "trend": {"value": total_parts, "isPositive": True},
        },
        {
            "title": "Active Installations",
            "value": active,
            "description": "Currently installed",
            "icon": "Wrench",
            "trend": {"value": active, "isPositive": True},
        },
        {
            "title": "Pending Replacements",
            "value": pending_replacements,
            "description": "Require attention",
            "icon": "AlertTriangle",
            "trend": {"value": 0, "isPositive": False},
        },
        {
            "title": "System Efficiency",
            "value": system_efficiency,
            "description": "Overall performance",
            "icon": "TrendingUp",
            "trend": {"value": 0, "isPositive": True},
        },
    ]


@router.get("/recent-activity", response_model=List[ActivityEntry])
def recent_activity(store: RecordStore = Depends(get_store)):
    return [
        {
            "id": inst.id,
            "action": "Part Installed",
            "details": f"{inst.partName or 'Unknown Part'} ({inst.uid}) installed at {na(inst.address)}",
            "timestamp": inst.timestamp.strftime("%m/%d/%Y, %I:%M:%S %p"),
            "type": "install",
        }
        for inst in store.recent_installations(RECENT_LIMIT)
    ]


@router.get("/health")
def health(store: RecordStore = Depends(get_store)):
    return {"status": "ok", **store.get_store_info()}
