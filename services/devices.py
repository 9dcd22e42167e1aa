# services/devices.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from errors import NotFound
from services import config


@dataclass(frozen=True)
class Device:
    id: str
    name: str


DEVICES: tuple[Device, ...] = tuple(Device(id=i, name=n) for i, n in config.DEVICES)


def list_devices() -> List[Device]:
    return list(DEVICES)


def find_device(device_id: str) -> Optional[Device]:
    for d in DEVICES:
        if d.id == device_id:
            return d
    return None


def get_device(device_id: str) -> Device:
    d = find_device(device_id)
    if d is None:
        raise NotFound("device", device_id)
    return d


def device_name(device_id: str) -> str:
    """Display name, falling back to the raw id for devices no longer configured."""
    d = find_device(device_id)
    return d.name if d else device_id
