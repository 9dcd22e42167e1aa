from __future__ import annotations
from fastapi import APIRouter, Depends, Request

from deps import require_admin
from schemas import AccumulateResult
from services.accumulator import accumulate_tick
from services.devices import list_devices

router = APIRouter(prefix="/admin/tasks", tags=["admin-tasks"], dependencies=[Depends(require_admin)])


@router.post("/accumulate", response_model=AccumulateResult)
async def accumulate(request: Request):
    """Run one accumulation pass now, outside the periodic schedule."""
    return await accumulate_tick(request.app.state.reading_source, list_devices())
