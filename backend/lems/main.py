"""
LEMS field API.

Run with `lems-api` (or `uvicorn lems.main:app`). LEMS_HOST and LEMS_PORT
choose the bind address; CORS_ORIGINS adds comma-separated allowed origins
to the local frontend defaults.
"""
import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lems.database import init_db
from lems.routes import cv_forms, events, live, matches, me, reports, scoresheets, tables, teams

logger = logging.getLogger(__name__)

APP_NAME = "LEMS Field API"

app = FastAPI(title=APP_NAME)

_cors_origins = ["http://localhost:4200", "http://127.0.0.1:4200"]
_cors_origins.extend(o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip())

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module, tag in (
    (me, "auth"),
    (events, "events"),
    (teams, "teams"),
    (tables, "tables"),
    (matches, "matches"),
    (reports, "reports"),
    (cv_forms, "cv-forms"),
    (scoresheets, "scoresheets"),
):
    app.include_router(module.router, prefix="/api", tags=[tag])

# Push channel lives outside /api
app.include_router(live.router)


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info(f"{APP_NAME} started with {len(app.routes)} routes")


@app.get("/api/health")
def health_check():
    return {"app_name": APP_NAME, "status": "healthy"}


def run() -> None:
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host=os.getenv("LEMS_HOST", "127.0.0.1"), port=int(os.getenv("LEMS_PORT", "3333")))
