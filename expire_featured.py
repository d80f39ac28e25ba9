"""Manual run of the featured listings expiry job."""
import asyncio
import logging

from bazaar.core.cache import cache_service
from bazaar.database import AsyncSessionLocal
from bazaar.services.featured_service import FeaturedService

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main():
    """Deactivate featured entries whose end date has passed."""
    try:
        async with AsyncSessionLocal() as db:
            expired_count = await FeaturedService(db).expire_past_due()
        await cache_service.invalidate_businesses()
        await cache_service.disconnect()
        logger.info(f"Deactivated {expired_count} expired featured entries")
    except Exception as e:
        logger.error(f"Featured expiry failed: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    asyncio.run(main())
