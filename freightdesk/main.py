"""
FreightDesk — Settlement Eligibility API

Endpoints:
  GET  /health                                – Health check (no auth)
  POST /api/loads/{load_id}/hold              – Hold a load out of settlement
  POST /api/loads/{load_id}/release           – Release a held load
  POST /api/loads/{load_id}/pod               – Upload POD (optional auto-release)
  POST /api/loads/{load_id}/convert-to-contract – Promote a route to contract
  GET  /api/lane-review/queue                 – Loads awaiting spot review

All /api/* endpoints require headers: X-API-Key, X-Org-Id, X-User-Id
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from freightdesk.config import get_settings
from freightdesk.db.schema import init_db
from freightdesk.db.seed import seed_demo_data
from freightdesk.errors import FreightDeskError
from freightdesk.routes import health, holds, lane_review, loads

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    s = get_settings()
    logging.basicConfig(
        level=s.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    if s.seed_demo_data:
        seed_demo_data()
    log.info("%s ready (db=%s, demo data=%s)",
             s.app_name, s.database_path, s.seed_demo_data)
    yield


app = FastAPI(
    title="FreightDesk Settlement API",
    description="Load holds, POD release and spot-to-contract lane promotion.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FreightDeskError)
async def handle_domain_error(request: Request, exc: FreightDeskError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(health.router)
app.include_router(holds.router)
app.include_router(lane_review.router)
app.include_router(loads.router)
