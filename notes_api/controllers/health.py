"""
Notes API — Health Controller
=============================

What:  Liveness and readiness probes plus the API info document.
Why:   Orchestrators and load balancers route away from instances whose
       database is unreachable.
How:   /health runs `SELECT 1` on a pooled connection. The service stays
       up either way; `status` flips to DEGRADED so monitoring can alert.

Status levels:
    OK:        database reachable
    DEGRADED:  database unreachable (HTTP 200, flagged for monitoring)
"""

import logging
import time

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.responses import JSONResponse

from notes_api import __version__
from notes_api.config import settings
from notes_api.controllers.base import BaseController
from notes_api.envelope import utc_timestamp
from notes_api.schemas.common import HealthData

logger = logging.getLogger(__name__)

# Track when the service started for uptime reporting
_start_time = time.time()


class HealthController(BaseController):
    def __init__(self, bind: AsyncEngine):
        self.bind = bind

    async def check_database(self) -> bool:
        try:
            async with self.bind.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Health check: database unreachable: %s", e)
            return False

    async def health(self) -> JSONResponse:
        db_ok = await self.check_database()
        data = HealthData(
            status="OK" if db_ok else "DEGRADED",
            timestamp=utc_timestamp(),
            uptime=round(time.time() - _start_time, 2),
            environment=settings.node_env,
            version=__version__,
            database="connected" if db_ok else "disconnected",
        )
        return self.send_success(data.model_dump(by_alias=True), "Service is healthy")

    async def ping(self) -> JSONResponse:
        return self.send_success({"pong": True}, "Pong!")

    async def api_info(self) -> JSONResponse:
        return self.send_success(
            {
                "name": "Notes API",
                "version": settings.api_version,
                "environment": settings.node_env,
                "timestamp": utc_timestamp(),
            },
            "API is running",
        )
