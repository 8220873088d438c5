# backend/models/dashboard_model.py
from typing import Union

from pydantic import BaseModel


class StatTrend(BaseModel):
    value: int
    isPositive: bool


class DashboardStat(BaseModel):
    title: str
    value: Union[int, str]
    description: str
    icon: str
    trend: StatTrend


class ActivityEntry(BaseModel):
    id: int
    action: str
    details: str
    timestamp: str
    type: str
