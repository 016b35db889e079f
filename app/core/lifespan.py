# app/core/lifespan.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.db import mongo, redis as r
from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    # Mongo holds products and orders: required
    if settings.MONGO_URI:
        try:
            await mongo.connect()
            logger.info("Mongo connected db=%s", settings.MONGO_DB)
        except Exception as e:
            logger.error("Mongo connection failed: %s", e)
            raise
    else:
        logger.warning("No MONGO_URI provided, skipping Mongo connection")

    # Redis only backs the recommendations cache: optional
    if settings.REDIS_URL:
        try:
            await r.connect()
        except Exception as e:
            logger.warning("Redis connection failed (ignored): %s", e)
    else:
        logger.warning("No REDIS_URL provided, recommendations will not be cached")

    yield

    # --- Shutdown ---
    try:
        if settings.REDIS_URL:
            await r.disconnect()
    except Exception as e:
        logger.warning("Redis disconnect error: %s", e)

    try:
        if settings.MONGO_URI:
            await mongo.disconnect()
            logger.info("Mongo disconnected")
    except Exception as e:
        logger.warning("Mongo disconnect error: %s", e)
