# backend/services/warranty_service.py
"""
保固狀態：到期日 = dateOfCommencement + warranty 字串中第一個整數（年）

  daysRemaining < 0     → Expired
  daysRemaining <= 30   → Expiring Soon
  其餘                  → Active

缺欄位或日期無法解析 → Active，daysRemaining / expiryDate 皆為 None。
"""
from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Iterable, List, Optional

from models.installation_model import Installation
from models.inventory_model import InventoryItem, WarrantyInfo

logger = logging.getLogger(__name__)

EXPIRING_SOON_DAYS = 30
ALERT_STATUSES = ("Expiring Soon", "Expired")

_YEARS_RE = re.compile(r"\d+")
_UNKNOWN = WarrantyInfo(status="Active", daysRemaining=None, expiryDate=None)


def warranty_years(warranty: str) -> int:
    """ "5 years" → 5；沒有數字 → 0"""
    m = _YEARS_RE.search(warranty)
    return int(m.group()) if m else 0


def parse_commencement(value: str) -> datetime:
    """ISO 日期 / 日期時間 → naive local datetime（僅日期時為當天 00:00）"""
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def add_years(start: datetime, years: int) -> datetime:
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        # 2/29 + n 年落在平年 → 2/28
        return start.replace(year=start.year + years, day=28)


def days_between(later: datetime, earlier: datetime) -> int:
    """完整天數，朝 0 截斷（-0.5 天算 0）"""
    return int((later - earlier).total_seconds() / 86400)


def warranty_status(
    commencement: Optional[str],
    warranty: Optional[str],
    now: Optional[datetime] = None,
) -> WarrantyInfo:
    if not commencement or not warranty:
        return _UNKNOWN

    try:
        start = parse_commencement(commencement)
    except ValueError:
        logger.warning("Unparseable commencement date for warranty status: %r", commencement)
        return _UNKNOWN

    expiry = add_years(start, warranty_years(warranty))
    days = days_between(expiry, now or datetime.now())

    if days < 0:
        status = "Expired"
    elif days <= EXPIRING_SOON_DAYS:
        status = "Expiring Soon"
    else:
        status = "Active"
    return WarrantyInfo(status=status, daysRemaining=days, expiryDate=expiry.date())


def inventory_item(inst: Installation, now: Optional[datetime] = None) -> InventoryItem:
    return InventoryItem(
        id=inst.id,
        uid=inst.uid,
        partName=inst.partName,
        partSubType=inst.partSubType,
        address=inst.address,
        dateOfCommencement=inst.dateOfCommencement,
        warranty=inst.warranty,
        warrantyInfo=warranty_status(inst.dateOfCommencement, inst.warranty, now),
    )


def warranty_alerts(
    installations: Iterable[Installation], now: Optional[datetime] = None
) -> List[InventoryItem]:
    """只留 Expiring Soon / Expired，順序與輸入相同"""
    now = now or datetime.now()
    items = (inventory_item(inst, now) for inst in installations)
    return [item for item in items if item.warrantyInfo.status in ALERT_STATUSES]


__all__ = [
    "warranty_status", "warranty_alerts", "inventory_item",
    "warranty_years", "add_years", "EXPIRING_SOON_DAYS",
]
