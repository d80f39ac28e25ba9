"""Application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from bazaar.config import settings
from bazaar.api.v1 import router as api_v1_router
from bazaar.core.cache import cache_service
from bazaar.database import AsyncSessionLocal
from bazaar.services.featured_service import FeaturedService

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


async def expire_featured_businesses():
    """Periodic job: deactivate featured entries past their end date."""
    try:
        async with AsyncSessionLocal() as db:
            expired_count = await FeaturedService(db).expire_past_due()
        if expired_count > 0:
            await cache_service.invalidate_businesses()
            logger.info(f"Deactivated {expired_count} expired featured entries")
    except Exception as e:
        logger.error(f"Featured expiry job failed: {e}", exc_info=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle."""
    # Startup
    await cache_service.connect()

    scheduler.add_job(
        expire_featured_businesses,
        trigger=CronTrigger(hour=settings.featured_expiry_hour, minute=0),
        id="expire_featured_businesses",
        name="Expire featured businesses",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(f"Scheduler started, featured expiry runs daily at {settings.featured_expiry_hour}:00 UTC")

    yield

    # Shutdown
    scheduler.shutdown(wait=False)
    await cache_service.disconnect()


app = FastAPI(
    title="Bazaar Directory API",
    description="Backend API for the Istanbul bazaar business directory",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)

# Any origin in development; credentials need an explicit list
if settings.is_development:
    cors_origins = ["*"]
    allow_creds = False
else:
    cors_origins = list(set(settings.cors_origins))
    allow_creds = True

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_creds,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {
        "message": "Bazaar Directory API",
        "version": "1.0.0",
        "docs": app.docs_url,
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}
