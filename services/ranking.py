# services/ranking.py
from __future__ import annotations
import asyncio
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from errors import ValidationError
from services import store
from services.devices import DEVICES, Device, device_name, get_device

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class Status(str, Enum):
    INCREASE = "Increase"
    DECREASE = "Decrease"
    NO_CHANGE = "NoChange"


@dataclass(frozen=True)
class RankingEntry:
    position: int
    device_id: str
    name: str
    total: float


@dataclass(frozen=True)
class Comparison:
    device: Device
    month_a: str
    month_b: str
    total_a: float
    total_b: float
    difference: float
    status: Status

    @property
    def missing_a(self) -> bool:
        return self.total_a == 0

    @property
    def missing_b(self) -> bool:
        return self.total_b == 0


def validate_month(month: str) -> str:
    if not isinstance(month, str) or not _MONTH_RE.match(month):
        raise ValidationError("month", month, "expected YYYY-MM")
    return month


def status_for(difference: float) -> Status:
    if difference > 0:
        return Status.INCREASE
    if difference < 0:
        return Status.DECREASE
    return Status.NO_CHANGE


def _ordered(totals: Iterable[Tuple[str, float]]) -> List[RankingEntry]:
    # total desc, device id asc on ties
    rows = sorted(((d, round(t, 2)) for d, t in totals), key=lambda x: (-x[1], x[0]))
    return [
        RankingEntry(position=i + 1, device_id=d, name=device_name(d), total=t)
        for i, (d, t) in enumerate(rows)
    ]


async def rank_monthly(month: str) -> List[RankingEntry]:
    """Devices with consumption recorded in `month`, biggest consumer first."""
    validate_month(month)
    totals = await store.sum_by_device(month)
    return _ordered(totals.items())


async def monthly_totals(month: str) -> List[RankingEntry]:
    """Like rank_monthly but covers every configured device, 0.0 when silent."""
    validate_month(month)
    totals: Dict[str, float] = await store.sum_by_device(month)
    return _ordered((d.id, totals.get(d.id, 0.0)) for d in DEVICES)


async def compare_months(device_id: str, month_a: str, month_b: str) -> Comparison:
    device = get_device(device_id)
    validate_month(month_a)
    validate_month(month_b)
    total_a, total_b = await asyncio.gather(
        store.sum_for_device(device_id, month_a),
        store.sum_for_device(device_id, month_b),
    )
    total_a, total_b = round(total_a, 2), round(total_b, 2)
    difference = round(total_b - total_a, 2)
    return Comparison(
        device=device,
        month_a=month_a,
        month_b=month_b,
        total_a=total_a,
        total_b=total_b,
        difference=difference,
        status=status_for(difference),
    )
