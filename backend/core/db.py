"""
core/db.py ── in-process record store (installations / reports)
Append-only, lost on restart. All mutation goes through one asyncio.Lock so
id / uid allocation cannot race between interleaved requests.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Generic, List, Optional, TypeVar

from models.installation_model import Installation, InstallationFields
from models.report_model import Report
from services.uid_allocator import allocate_uid

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ══════════════════════════════════════════════
# ① Collection
# ══════════════════════════════════════════════
class Collection(Generic[T]):
    def __init__(self, name: str, lock: asyncio.Lock):
        self.name = name
        self._items: List[T] = []
        self._lock = lock

    async def append(self, build: Callable[[int], T]) -> T:
        """build(next_id) 在鎖內執行；next_id = 目前筆數 + 1"""
        async with self._lock:
            record = build(len(self._items) + 1)
            self._items.append(record)
            return record

    def list_reversed(self) -> List[T]:
        return list(reversed(self._items))

    def find_by(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for item in self._items:
            if predicate(item):
                return item
        return None

    def latest(self, n: int) -> List[T]:
        """最新 n 筆，新到舊"""
        if n <= 0:
            return []
        return list(reversed(self._items[-n:]))

    def count(self) -> int:
        return len(self._items)


# ══════════════════════════════════════════════
# ② Record store
# ══════════════════════════════════════════════
class RecordStore:
    def __init__(self):
        self._lock = asyncio.Lock()
        self.installations: Collection[Installation] = Collection("installations", self._lock)
        self.reports: Collection[Report] = Collection("reports", self._lock)

    # ───────── installations ─────────
    async def create_installation(
        self, fields: InstallationFields, photo: str | None = None
    ) -> Installation:
        def build(next_id: int) -> Installation:
            return Installation(
                **fields.model_dump(),
                id=next_id,
                uid=allocate_uid(fields.partName, next_id),
                photo=photo,
                timestamp=datetime.now(),
            )

        record = await self.installations.append(build)
        logger.info("Saved installation record: id=%s uid=%s", record.id, record.uid)
        return record

    def list_installations(self) -> List[Installation]:
        return self.installations.list_reversed()

    def find_installation_by_uid(self, uid: str) -> Optional[Installation]:
        return self.installations.find_by(lambda inst: inst.uid == uid)

    def recent_installations(self, limit: int = 5) -> List[Installation]:
        return self.installations.latest(limit)

    # ───────── reports ─────────
    async def create_report(
        self, qr_data: str, summary: str, photo: str | None = None
    ) -> Report:
        record = await self.reports.append(
            lambda next_id: Report(
                id=next_id,
                qrData=qr_data,
                summary=summary,
                photo=photo,
                timestamp=datetime.now(),
            )
        )
        logger.info("Saved report record: id=%s qrData=%s", record.id, record.qrData)
        return record

    def list_reports(self) -> List[Report]:
        return self.reports.list_reversed()

    def find_report_by_id(self, report_id: int) -> Optional[Report]:
        return self.reports.find_by(lambda r: r.id == report_id)

    # ───────── info ─────────
    def get_store_info(self) -> dict:
        return {
            "installations": self.installations.count(),
            "reports": self.reports.count(),
        }


# 全域 store（process 生命週期）
record_store = RecordStore()
