# services/store.py
from __future__ import annotations
from typing import Dict, List, Optional

from tortoise.exceptions import BaseORMException
from tortoise.functions import Sum

from errors import StoreError
from models import DailyConsumption


async def get_record(device_id: str, day: str) -> Optional[DailyConsumption]:
    try:
        return await DailyConsumption.get_or_none(device_id=device_id, day=day)
    except BaseORMException as e:
        raise StoreError("get", e) from e


async def insert_record(device_id: str, day: str, reading: float) -> DailyConsumption:
    """First observation of the day: start == end == reading, nothing consumed yet."""
    try:
        return await DailyConsumption.create(
            device_id=device_id,
            day=day,
            energy_start=reading,
            energy_end=reading,
            consumption=0.0,
        )
    except BaseORMException as e:
        raise StoreError("insert", e) from e


async def update_record(
    rec: DailyConsumption,
    reading: float,
    *,
    reset_detected: bool = False,
) -> DailyConsumption:
    """
    Move energy_end to the new reading and recompute consumption from the
    stored energy_start. A reset flag, once set on a day, stays set.
    """
    rec.energy_end = reading
    rec.consumption = max(reading - rec.energy_start, 0.0)
    rec.reset_detected = rec.reset_detected or reset_detected
    try:
        await rec.save()
    except BaseORMException as e:
        raise StoreError("update", e) from e
    return rec


async def list_records(device_id: str) -> List[DailyConsumption]:
    try:
        return await DailyConsumption.filter(device_id=device_id).order_by("day")
    except BaseORMException as e:
        raise StoreError("list", e) from e


async def sum_by_device(month: str) -> Dict[str, float]:
    """Monthly consumption per device for records whose day starts with `month`."""
    try:
        rows = await (
            DailyConsumption.filter(day__startswith=month)
            .annotate(total=Sum("consumption"))
            .group_by("device_id")
            .values("device_id", "total")
        )
    except BaseORMException as e:
        raise StoreError("sum", e) from e
    return {r["device_id"]: float(r["total"] or 0.0) for r in rows}


async def sum_for_device(device_id: str, month: str) -> float:
    try:
        rows = await (
            DailyConsumption.filter(device_id=device_id, day__startswith=month)
            .annotate(total=Sum("consumption"))
            .group_by("device_id")
            .values("total")
        )
    except BaseORMException as e:
        raise StoreError("sum", e) from e
    if not rows:
        return 0.0
    return float(rows[0]["total"] or 0.0)
