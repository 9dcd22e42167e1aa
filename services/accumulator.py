# services/accumulator.py
from __future__ import annotations
import logging
from datetime import datetime
from typing import Dict, Iterable, Optional
from zoneinfo import ZoneInfo

from errors import ReadingError, StoreError
from services import config, store
from services.devices import Device
from services.readings import ReadingSource

logger = logging.getLogger(__name__)


def local_day(now: Optional[datetime] = None, tz: str = config.APP_TZ) -> str:
    """Calendar day (YYYY-MM-DD) of `now` in the configured timezone."""
    zone = ZoneInfo(tz)
    now = now or datetime.now(zone)
    if now.tzinfo is None:
        now = now.replace(tzinfo=zone)
    return now.astimezone(zone).strftime("%Y-%m-%d")


async def accumulate_device(source: ReadingSource, device_id: str, day: str) -> str:
    """
    Fold one fresh reading into the device's record for `day`.
    Returns "created" or "updated".
    """
    try:
        reading = source.read(device_id)
    except Exception as e:
        raise ReadingError(device_id, e) from e
    rec = await store.get_record(device_id, day)
    if rec is None:
        await store.insert_record(device_id, day, reading)
        return "created"

    reset = reading < rec.energy_end
    if reset:
        logger.warning(
            f"[accumulate] counter dip on {device_id} {day}: "
            f"{rec.energy_end:.2f} -> {reading:.2f} (start {rec.energy_start:.2f})"
        )
    await store.update_record(rec, reading, reset_detected=reset)
    return "updated"


async def accumulate_tick(
    source: ReadingSource,
    devices: Iterable[Device],
    now: Optional[datetime] = None,
) -> Dict[str, int]:
    """
    One sampling pass over every device. Reading and store failures are
    logged and the device is skipped; the next tick writes the same record again.
    """
    day = local_day(now)
    counts = {"created": 0, "updated": 0, "failed": 0}
    for dev in devices:
        try:
            outcome = await accumulate_device(source, dev.id, day)
        except (ReadingError, StoreError) as e:
            logger.warning(f"[accumulate] {dev.id} {day}: {e}")
            counts["failed"] += 1
            continue
        counts[outcome] += 1
    logger.debug(f"[accumulate] {day} {counts}")
    return counts
