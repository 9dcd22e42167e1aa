# services/config.py
from __future__ import annotations
import os

from dotenv import load_dotenv

load_dotenv()  # loads values from a local .env file if present

# ------------------------------------------------------------------------------
# Helper: get env var with fallback
# ------------------------------------------------------------------------------
def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


def _pairs(raw: str) -> list[tuple[str, str]]:
    """'A:x,B:y' -> [("A", "x"), ("B", "y")]; entries without ':' use the id as name."""
    out = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        key, _, value = item.partition(":")
        out.append((key.strip(), value.strip() or key.strip()))
    return out


# ------------------------------------------------------------------------------
# Database
# ------------------------------------------------------------------------------
DB_URL: str = _env("DB_URL", "sqlite://./energy.db")

# ------------------------------------------------------------------------------
# Accumulation
# ------------------------------------------------------------------------------
ACCUMULATION_INTERVAL_SECONDS: int = int(_env("ACCUMULATION_INTERVAL_SECONDS", "10"))
APP_TZ: str = _env("APP_TZ", "UTC")

# Monitored devices (comma-separated "ID:Name" env -> list)
DEVICES: list[tuple[str, str]] = _pairs(
    _env("DEVICES", "PAC_01:TRAFO 1,PAC_02:MACERAÇÃO,PAC_03:SECADOR")
)

# Simulated counters
SIMULATED_START: float = float(_env("SIMULATED_START", "1000"))
SIMULATED_MAX_STEP: float = float(_env("SIMULATED_MAX_STEP", "2"))

# ------------------------------------------------------------------------------
# Reports
# ------------------------------------------------------------------------------
REPORTS_DIR: str = _env("REPORTS_DIR", "reports")
COMPANY_NAME: str = _env("COMPANY_NAME", "AGRICOLA HORIZONTE")
LOGO_PATH: str = _env("LOGO_PATH", "public/img/logo.png")
# Unicode TTF fonts for reports; missing files fall back to the Latin-1 core fonts
FONT_PATH: str = _env("FONT_PATH", "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf")
FONT_BOLD_PATH: str = _env("FONT_BOLD_PATH", "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf")

# ------------------------------------------------------------------------------
# Auth
# ------------------------------------------------------------------------------
SECRET_KEY: str = _env("SECRET_KEY", "change-me")
REFRESH_SECRET: str = _env("REFRESH_SECRET", "change-me-too")
ALGORITHM: str = "HS256"
ACCESS_EXPIRE_SECONDS: int = int(_env("ACCESS_EXPIRE_SECONDS", str(15 * 60)))
REFRESH_EXPIRE_SECONDS: int = int(_env("REFRESH_EXPIRE_SECONDS", str(7 * 24 * 3600)))

# Accounts created on an empty users table: "user:password:profile,..."
SEED_USERS: list[tuple[str, str, str]] = [
    tuple(u.strip().split(":", 2))  # type: ignore[misc]
    for u in _env(
        "SEED_USERS",
        "admin:admin123:admin,operador:operador123:operator,leitura:leitura123:readonly",
    ).split(",")
    if u.count(":") == 2
]

CORS_ORIGINS: list[str] = [
    o.strip() for o in _env("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",") if o.strip()
]
