# routers/devices.py
from fastapi import APIRouter, Depends

from api_utils import to_http
from deps import require_login
from errors import EnergyError
from schemas import DailyConsumptionRead, DeviceRead
from services import store
from services.devices import get_device, list_devices

router = APIRouter(prefix="/api", tags=["devices"], dependencies=[Depends(require_login)])


@router.get("/devices", response_model=list[DeviceRead])
async def devices():
    return [DeviceRead.model_validate(d) for d in list_devices()]


@router.get("/consumption/{device_id}", response_model=list[DailyConsumptionRead])
async def consumption(device_id: str):
    """Daily records of one device, oldest day first."""
    try:
        get_device(device_id)
        rows = await store.list_records(device_id)
    except EnergyError as e:
        raise to_http(e)
    return [DailyConsumptionRead.model_validate(r) for r in rows]
