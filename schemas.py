from typing import List
from pydantic import BaseModel, ConfigDict

from models import Profile


# =========================
# Auth
# =========================
class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str


class UserRead(BaseModel):
    id: int
    username: str
    profile: Profile
    disabled: bool
    model_config = ConfigDict(from_attributes=True)


# =========================
# Devices & consumption
# =========================
class DeviceRead(BaseModel):
    id: str
    name: str
    model_config = ConfigDict(from_attributes=True)


class DailyConsumptionRead(BaseModel):
    id: int
    device_id: str
    day: str
    energy_start: float
    energy_end: float
    consumption: float
    reset_detected: bool
    model_config = ConfigDict(from_attributes=True)


# =========================
# Ranking
# =========================
class RankingItem(BaseModel):
    position: int
    name: str
    consumption: float


class RankingResponse(BaseModel):
    month: str
    ranking: List[RankingItem]


class AccumulateResult(BaseModel):
    created: int
    updated: int
    failed: int
