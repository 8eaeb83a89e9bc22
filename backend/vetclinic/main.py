"""Module: main."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vetclinic.api.v1.api import api_router
from vetclinic.core.config import settings
from vetclinic.core.logging import configure_logging
from vetclinic.db.init_db import init_db

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Vet Clinic Records API", version="0.1.0")

app.include_router(api_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

init_db()

rules = settings.clinic_rules()
logger.info(
    "Clinic schedule: %s-%s, last operating date %s, %d visits/day",
    rules.opening_time, rules.closing_time, rules.last_operating_date, rules.daily_capacity,
)
