# main.py (lifespan-based)
from __future__ import annotations

import asyncio, logging, contextlib
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from tortoise import Tortoise, connections

from routers import auth, devices, reports, admin_tasks

# Background pieces
from scheduler import Scheduler
from services import config
from services.accumulator import accumulate_tick
from services.devices import DEVICES
from services.readings import SimulatedReadingSource
from services.seeder import seed_users_if_empty

logger = logging.getLogger("uvicorn")


# ----- scheduled jobs -----
async def _job_accumulate(app: FastAPI):
    counts = await accumulate_tick(app.state.reading_source, DEVICES)
    if counts["failed"]:
        logger.warning(f"[scheduler] accumulate: {counts}")


# ----- lifespan -----
@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1) DB init
    await Tortoise.init(
        db_url=config.DB_URL,
        modules={"models": ["models"]},
    )
    await Tortoise.generate_schemas()

    # 2) Seeds
    await seed_users_if_empty(logger=logger.info)

    # 3) Meter readings
    app.state.reading_source = SimulatedReadingSource(d.id for d in DEVICES)

    # 4) Scheduler
    sched = Scheduler()
    app.state.scheduler = sched
    sched.every(config.ACCUMULATION_INTERVAL_SECONDS, _job_accumulate, app)

    sched_task = asyncio.create_task(sched.run_forever())
    try:
        yield
    finally:
        if not sched_task.done():
            sched_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sched_task
        await connections.close_all()


# ----- app & routers -----
app = FastAPI(lifespan=lifespan, title="Energy Control API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(devices.router)
app.include_router(reports.router)
app.include_router(admin_tasks.router)

for route in app.routes:
    if isinstance(route, APIRoute):
        logger.info("%s -> %s", list(route.methods), route.path)
