from enum import Enum

from tortoise import fields, models


class Profile(str, Enum):
    ADMIN = "admin"
    OPERATOR = "operator"
    READONLY = "readonly"


# -------- Users --------
class User(models.Model):
    id = fields.IntField(pk=True)
    username = fields.CharField(max_length=50, unique=True, index=True)
    hashed_password = fields.CharField(max_length=128)
    profile = fields.CharEnumField(Profile, max_length=16, default=Profile.READONLY)
    disabled = fields.BooleanField(default=False)

    class Meta:
        table = "users"

    def __str__(self) -> str:
        return f"{self.username} ({self.profile.value})"

    @property
    def is_admin(self) -> bool:
        return self.profile == Profile.ADMIN


# -------- Metering --------
class DailyConsumption(models.Model):
    """
    One row per (device, calendar day). energy_start is the counter at the
    first observation of the day, energy_end at the latest one.
    """
    id = fields.IntField(pk=True)
    device_id = fields.CharField(max_length=64, index=True)
    day = fields.CharField(max_length=10, index=True)  # YYYY-MM-DD
    energy_start = fields.FloatField()
    energy_end = fields.FloatField()
    consumption = fields.FloatField(default=0.0)
    reset_detected = fields.BooleanField(default=False)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "daily_energy"
        unique_together = ("device_id", "day")

    def __str__(self) -> str:
        return f"{self.device_id}@{self.day} ({self.consumption:.2f})"
